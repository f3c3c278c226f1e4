"""Request and response schemas for report endpoints."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from consulta_prod.core.schemas import ApiModel
from consulta_prod.production.schemas import ProductionRow
from consulta_prod.query.schemas import FILTERABLE_FIELDS

# Plain columns of the report row that can be requested for export, besides filterable ones
ROW_FIELDS = ("id", "prdDtcomp", "prdDtreal", "prdQtd", "prdVlP", "prdCidpri", "cbo", "prestador", "procedimento", "sRub")


class ExportFormat(str, Enum):
    CSV = "csv"
    EXCEL = "excel"
    PDF = "pdf"


class ExportRequest(ApiModel):
    """Body of ``POST /reports/export``.

    ``filters`` takes the same shapes as the ``filters`` query parameter of
    ``GET /reports/data``, either as an object/list or as a JSON string.
    """

    format: ExportFormat
    filters: Optional[Union[Dict[str, Any], List[Any], str]] = None
    fields: List[str] = Field(default_factory=list)

    @field_validator("fields")
    @classmethod
    def known_fields(cls, v: List[str]) -> List[str]:
        unknown = [name for name in v if name not in FILTERABLE_FIELDS and name not in ROW_FIELDS]
        if unknown:
            raise ValueError(f"Unknown export fields: {', '.join(unknown)}")
        return v


class ExportResponse(ApiModel):
    success: bool
    message: str
    total: int
    data: List[ProductionRow]
