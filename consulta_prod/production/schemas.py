"""Pydantic schemas for production records and the denormalised report row."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from consulta_prod.core.schemas import ApiModel

FOREIGN_KEY_FIELDS = ("prd_cbo", "prd_prest", "prd_proc", "prd_rub")


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC; aware values are converted first."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ConsultaProdBase(ApiModel):
    prd_dtcomp: datetime
    prd_dtreal: datetime
    prd_qtd: int = Field(ge=0)
    prd_vl_p: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    prd_cidpri: Optional[str] = Field(default=None, max_length=20)
    prd_cbo: Optional[str] = None
    prd_prest: Optional[str] = None
    prd_proc: Optional[str] = None
    prd_rub: Optional[str] = None

    @field_validator("prd_cidpri", *FOREIGN_KEY_FIELDS, mode="before")
    @classmethod
    def empty_string_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("prd_dtcomp", "prd_dtreal", mode="after")
    @classmethod
    def store_as_naive_utc(cls, v):
        return to_naive_utc(v) if v is not None else v


class ConsultaProdCreate(ConsultaProdBase):
    pass


class ConsultaProdUpdate(ApiModel):
    prd_dtcomp: Optional[datetime] = None
    prd_dtreal: Optional[datetime] = None
    prd_qtd: Optional[int] = None
    prd_vl_p: Optional[Decimal] = None
    prd_cidpri: Optional[str] = None
    prd_cbo: Optional[str] = None
    prd_prest: Optional[str] = None
    prd_proc: Optional[str] = None
    prd_rub: Optional[str] = None

    @field_validator("prd_cidpri", *FOREIGN_KEY_FIELDS, mode="before")
    @classmethod
    def empty_string_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("prd_dtcomp", "prd_dtreal", mode="after")
    @classmethod
    def store_as_naive_utc(cls, v):
        return to_naive_utc(v) if v is not None else v


class ConsultaProdRead(ConsultaProdBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ===== JOINED REPORT ROW =====

class CBORef(ApiModel):
    id: str
    codigo: str
    descricao: str


class PrestadorRef(ApiModel):
    id: str
    codigo: str
    nome_razao_social: str


class ProcedimentoRef(ApiModel):
    id: str
    codigo: str
    descricao: str


class SRubRef(ApiModel):
    id: str
    codigo: str
    descricao: str


class ProductionRow(ApiModel):
    """A production record with its four dimensions inlined (``null`` when unmatched)."""

    id: str
    prd_dtcomp: datetime
    prd_dtreal: datetime
    prd_qtd: int
    prd_vl_p: Decimal
    prd_cidpri: Optional[str] = None
    cbo: Optional[CBORef] = None
    prestador: Optional[PrestadorRef] = None
    procedimento: Optional[ProcedimentoRef] = None
    s_rub: Optional[SRubRef] = None
