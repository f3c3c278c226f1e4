"""Pydantic schemas for the reference-table API."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from consulta_prod.core.schemas import ApiModel


class TipoPrestador(str, Enum):
    """Provider person-type."""

    PESSOA_FISICA = "pessoa_fisica"
    PESSOA_JURIDICA = "pessoa_juridica"


class Complexidade(str, Enum):
    """Procedure complexity tier."""

    BAIXA = "baixa"
    MEDIA = "media"
    ALTA = "alta"


class ReferenceModel(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class RecordTimestamps(ApiModel):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ===== CBO =====

class CBOBase(ReferenceModel):
    codigo: str = Field(min_length=1, max_length=20)
    descricao: str = Field(min_length=1)
    status: bool = True


class CBOCreate(CBOBase):
    pass


class CBOUpdate(ReferenceModel):
    codigo: Optional[str] = None
    descricao: Optional[str] = None
    status: Optional[bool] = None


class CBORead(RecordTimestamps, CBOBase):
    pass


# ===== PRESTADOR =====

class PrestadorBase(ReferenceModel):
    codigo: str = Field(min_length=1, max_length=20)
    nome_razao_social: str = Field(min_length=1, max_length=255)
    cnpj_cpf: str = Field(min_length=1, max_length=20)
    tipo: TipoPrestador
    status: bool = True


class PrestadorCreate(PrestadorBase):
    pass


class PrestadorUpdate(ReferenceModel):
    codigo: Optional[str] = None
    nome_razao_social: Optional[str] = None
    cnpj_cpf: Optional[str] = None
    tipo: Optional[TipoPrestador] = None
    status: Optional[bool] = None


class PrestadorRead(RecordTimestamps, PrestadorBase):
    pass


# ===== PROCEDIMENTO =====

class ProcedimentoBase(ReferenceModel):
    codigo: str = Field(min_length=1, max_length=50)
    descricao: str = Field(min_length=1)
    valor: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    complexidade: Complexidade
    status: bool = True


class ProcedimentoCreate(ProcedimentoBase):
    pass


class ProcedimentoUpdate(ReferenceModel):
    codigo: Optional[str] = None
    descricao: Optional[str] = None
    valor: Optional[Decimal] = None
    complexidade: Optional[Complexidade] = None
    status: Optional[bool] = None


class ProcedimentoRead(RecordTimestamps, ProcedimentoBase):
    pass


# ===== S_RUB =====

class SRubBase(ReferenceModel):
    codigo: str = Field(min_length=1, max_length=20)
    descricao: str = Field(min_length=1)
    tipo_financiamento: str = Field(min_length=1, max_length=100)
    status: bool = True


class SRubCreate(SRubBase):
    pass


class SRubUpdate(ReferenceModel):
    codigo: Optional[str] = None
    descricao: Optional[str] = None
    tipo_financiamento: Optional[str] = None
    status: Optional[bool] = None


class SRubRead(RecordTimestamps, SRubBase):
    pass
