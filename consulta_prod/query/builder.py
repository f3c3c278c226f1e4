"""
FilterCompiler turns a ``ReportFilter`` into a SQLAlchemy predicate.

The predicate references the fact table and the four reference tables it is
left-joined to, so it must be applied to a select that carries those joins
(see ``consulta_prod.reporting.dao``).
"""

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from consulta_prod.core.exceptions import ValidationError
from consulta_prod.production.models import ConsultaProd
from consulta_prod.production.schemas import to_naive_utc
from consulta_prod.query.schemas import (
    FieldDefinition,
    FieldType,
    FilterClause,
    FilterOperator,
    LogicalOperator,
    ReportCriteria,
    ReportFilter,
)
from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub

DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

TABLE_MODELS = {
    "consulta_prod": ConsultaProd,
    "cbo": CBO,
    "prestador": Prestador,
    "procedimento": Procedimento,
    "s_rub": SRub,
}


def parse_date_value(value: Any, field_key: str) -> Tuple[datetime, bool]:
    """
    Parse an ISO date or datetime.

    Returns the naive datetime and whether the input carried only a date.
    Timezone-aware input is converted to UTC, matching how timestamps are stored.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day), True
    elif isinstance(value, str):
        text = value.strip()
        if DATE_ONLY_PATTERN.match(text):
            try:
                day = date.fromisoformat(text)
            except ValueError:
                raise ValidationError(f"Invalid date for {field_key}: '{value}'", field=field_key)
            return datetime(day.year, day.month, day.day), True
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid date for {field_key}: '{value}'", field=field_key)
    else:
        raise ValidationError(f"Invalid date for {field_key}: '{value}'", field=field_key)

    return to_naive_utc(parsed), False


def parse_integer_value(value: Any, field_key: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid integer for {field_key}: '{value}'", field=field_key)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid integer for {field_key}: '{value}'", field=field_key)


def parse_decimal_value(value: Any, field_key: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid number for {field_key}: '{value}'", field=field_key)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid number for {field_key}: '{value}'", field=field_key)
    if not number.is_finite():
        raise ValidationError(f"Invalid number for {field_key}: '{value}'", field=field_key)
    return number


class FilterCompiler:
    """
    Compiles report filters into SQLAlchemy boolean expressions.

    Clauses are folded left to right: each one is ANDed or ORed onto everything
    before it according to its own connector, so ``a OR b AND c`` means
    ``(a OR b) AND c``. The fixed criteria are then ANDed in front.
    """

    def __init__(self) -> None:
        self._operators: Dict[FilterOperator, Callable[[Any, FieldDefinition, Any], ColumnElement]] = {
            FilterOperator.EQUALS: self._equals,
            FilterOperator.CONTAINS: self._contains,
            FilterOperator.STARTS_WITH: self._starts_with,
            FilterOperator.ENDS_WITH: self._ends_with,
            FilterOperator.GREATER_THAN: self._greater_than,
            FilterOperator.LESS_THAN: self._less_than,
            FilterOperator.BETWEEN: self._between,
        }

    def compile(self, report_filter: ReportFilter) -> ColumnElement:
        """Build the WHERE predicate; a filter with nothing in it matches every row."""
        conditions = self.compile_criteria(report_filter.criteria)
        clauses = self.compile_clauses(report_filter)
        if clauses is not None:
            conditions.append(clauses)
        if not conditions:
            return true()
        return and_(*conditions)

    def compile_criteria(self, criteria: ReportCriteria) -> list:
        conditions = []
        if criteria.date_from:
            start, _ = parse_date_value(criteria.date_from, "dateFrom")
            conditions.append(ConsultaProd.prd_dtcomp >= start)
        if criteria.date_to:
            end, date_only = parse_date_value(criteria.date_to, "dateTo")
            if date_only:
                conditions.append(ConsultaProd.prd_dtcomp < end + timedelta(days=1))
            else:
                conditions.append(ConsultaProd.prd_dtcomp <= end)
        if criteria.prestador:
            conditions.append(ConsultaProd.prd_prest == criteria.prestador)
        if criteria.procedimento:
            conditions.append(ConsultaProd.prd_proc == criteria.procedimento)
        return conditions

    def compile_clauses(self, report_filter: ReportFilter) -> Optional[ColumnElement]:
        predicate = None
        for clause in report_filter.clauses:
            condition = self.compile_clause(clause)
            if predicate is None:
                predicate = condition
            elif clause.logical_operator == LogicalOperator.OR:
                predicate = or_(predicate, condition)
            else:
                predicate = and_(predicate, condition)
        return predicate

    def compile_clause(self, clause: FilterClause) -> ColumnElement:
        definition = clause.definition
        column = self.column_for(definition)
        handler = self._operators[clause.operator]
        return handler(column, definition, clause.value)

    @staticmethod
    def column_for(definition: FieldDefinition):
        model = TABLE_MODELS[definition.table_name]
        return getattr(model, definition.column_name)

    # Value coercion

    @staticmethod
    def _coerce(definition: FieldDefinition, value: Any) -> Any:
        if definition.field_type == FieldType.INTEGER:
            return parse_integer_value(value, definition.key)
        if definition.field_type == FieldType.DECIMAL:
            return parse_decimal_value(value, definition.key)
        return str(value).strip()

    # Operators. Date fields get day semantics when the value is a bare date.

    def _equals(self, column, definition: FieldDefinition, value: Any) -> ColumnElement:
        if definition.field_type == FieldType.DATE:
            moment, date_only = parse_date_value(value, definition.key)
            if date_only:
                return and_(column >= moment, column < moment + timedelta(days=1))
            return column == moment
        return column == self._coerce(definition, value)

    @staticmethod
    def _contains(column, definition: FieldDefinition, value: Any) -> ColumnElement:
        return column.icontains(str(value).strip(), autoescape=True)

    @staticmethod
    def _starts_with(column, definition: FieldDefinition, value: Any) -> ColumnElement:
        return column.istartswith(str(value).strip(), autoescape=True)

    @staticmethod
    def _ends_with(column, definition: FieldDefinition, value: Any) -> ColumnElement:
        return column.iendswith(str(value).strip(), autoescape=True)

    def _greater_than(self, column, definition: FieldDefinition, value: Any) -> ColumnElement:
        if definition.field_type == FieldType.DATE:
            moment, date_only = parse_date_value(value, definition.key)
            if date_only:
                return column >= moment + timedelta(days=1)
            return column > moment
        return column > self._coerce(definition, value)

    def _less_than(self, column, definition: FieldDefinition, value: Any) -> ColumnElement:
        if definition.field_type == FieldType.DATE:
            moment, _ = parse_date_value(value, definition.key)
            return column < moment
        return column < self._coerce(definition, value)

    def _between(self, column, definition: FieldDefinition, value: Any) -> ColumnElement:
        low, high = value
        conditions = []
        if definition.field_type == FieldType.DATE:
            if low is not None:
                start, _ = parse_date_value(low, definition.key)
                conditions.append(column >= start)
            if high is not None:
                end, date_only = parse_date_value(high, definition.key)
                conditions.append(column < end + timedelta(days=1) if date_only else column <= end)
        else:
            if low is not None:
                conditions.append(column >= self._coerce(definition, low))
            if high is not None:
                conditions.append(column <= self._coerce(definition, high))
        return and_(*conditions)
