"""
Filter model for the production report.

These types describe a user-composed search predicate independently of any
storage engine: the parser builds them from the JSON payload sent by the
client and the ``FilterCompiler`` turns them into a SQLAlchemy predicate.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class FilterOperator(str, Enum):
    """Operators a clause can apply to its field."""

    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    BETWEEN = "between"


TEXT_ONLY_OPERATORS = frozenset({FilterOperator.CONTAINS, FilterOperator.STARTS_WITH, FilterOperator.ENDS_WITH})


class LogicalOperator(str, Enum):
    """Connector joining a clause to everything before it."""

    AND = "AND"
    OR = "OR"


class FieldType(str, Enum):
    """How a clause value is interpreted for a field."""

    DATE = "date"
    INTEGER = "integer"
    DECIMAL = "decimal"
    TEXT = "text"


@dataclass(frozen=True)
class FieldDefinition:
    """A field that report filters may reference."""

    key: str
    table_name: str
    column_name: str
    field_type: FieldType
    label: str

    @property
    def is_text(self) -> bool:
        return self.field_type == FieldType.TEXT


def _field(key: str, table: str, column: str, field_type: FieldType, label: str) -> Tuple[str, FieldDefinition]:
    return key, FieldDefinition(key, table, column, field_type, label)


# Fact-table fields plus the text columns of the joined reference tables
FILTERABLE_FIELDS: Dict[str, FieldDefinition] = dict(
    [
        _field("prdDtcomp", "consulta_prod", "prd_dtcomp", FieldType.DATE, "Data Competência"),
        _field("prdDtreal", "consulta_prod", "prd_dtreal", FieldType.DATE, "Data Realização"),
        _field("prdCbo", "consulta_prod", "prd_cbo", FieldType.TEXT, "CBO"),
        _field("prdPrest", "consulta_prod", "prd_prest", FieldType.TEXT, "Prestador"),
        _field("prdProc", "consulta_prod", "prd_proc", FieldType.TEXT, "Procedimento"),
        _field("prdQtd", "consulta_prod", "prd_qtd", FieldType.INTEGER, "Quantidade"),
        _field("prdVlP", "consulta_prod", "prd_vl_p", FieldType.DECIMAL, "Valor"),
        _field("prdRub", "consulta_prod", "prd_rub", FieldType.TEXT, "Rubrica"),
        _field("prdCidpri", "consulta_prod", "prd_cidpri", FieldType.TEXT, "CID Principal"),
        _field("cbo.codigo", "cbo", "codigo", FieldType.TEXT, "Código CBO"),
        _field("cbo.descricao", "cbo", "descricao", FieldType.TEXT, "Descrição CBO"),
        _field("prestador.codigo", "prestador", "codigo", FieldType.TEXT, "Código Prestador"),
        _field("prestador.nomeRazaoSocial", "prestador", "nome_razao_social", FieldType.TEXT, "Nome/Razão Social"),
        _field("procedimento.codigo", "procedimento", "codigo", FieldType.TEXT, "Código Procedimento"),
        _field("procedimento.descricao", "procedimento", "descricao", FieldType.TEXT, "Descrição Procedimento"),
        _field("sRub.codigo", "s_rub", "codigo", FieldType.TEXT, "Código Rubrica"),
        _field("sRub.descricao", "s_rub", "descricao", FieldType.TEXT, "Descrição Rubrica"),
    ]
)


@dataclass(frozen=True)
class FilterClause:
    """One field/operator/value tuple and the connector that joins it to the clauses before it.

    ``value`` is the raw value from the payload; for ``between`` it is a
    ``(low, high)`` pair where either side may be ``None``.
    """

    field: str
    operator: FilterOperator
    value: Any
    logical_operator: LogicalOperator = LogicalOperator.AND

    @property
    def definition(self) -> FieldDefinition:
        return FILTERABLE_FIELDS[self.field]


@dataclass(frozen=True)
class ReportCriteria:
    """The fixed top-level keys of the report payload (all ANDed together)."""

    date_from: Optional[str] = None
    date_to: Optional[str] = None
    prestador: Optional[str] = None
    procedimento: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.date_from, self.date_to, self.prestador, self.procedimento))


@dataclass(frozen=True)
class ReportFilter:
    """Complete filter for a report request: fixed criteria AND the clause chain."""

    criteria: ReportCriteria = field(default_factory=ReportCriteria)
    clauses: Tuple[FilterClause, ...] = ()

    def is_empty(self) -> bool:
        return self.criteria.is_empty() and not self.clauses

    def describe(self) -> Dict[str, Any]:
        """JSON-friendly summary, used for audit snapshots."""
        return {
            "criteria": {
                key: value
                for key, value in (
                    ("dateFrom", self.criteria.date_from),
                    ("dateTo", self.criteria.date_to),
                    ("prestador", self.criteria.prestador),
                    ("procedimento", self.criteria.procedimento),
                )
                if value
            },
            "clauses": [
                {
                    "field": clause.field,
                    "operator": clause.operator.value,
                    "value": list(clause.value) if isinstance(clause.value, tuple) else clause.value,
                    "logicalOperator": clause.logical_operator.value,
                }
                for clause in self.clauses
            ],
        }
