"""Builds a ``ReportFilter`` from the client payload."""

import json
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from consulta_prod.core.exceptions import ValidationError
from consulta_prod.query.schemas import (
    FILTERABLE_FIELDS,
    TEXT_ONLY_OPERATORS,
    FilterClause,
    FilterOperator,
    LogicalOperator,
    ReportCriteria,
    ReportFilter,
)

FILTER_KEY_PATTERN = re.compile(r"^filter_(\d+)$")

CRITERIA_KEYS = {
    "dateFrom": "date_from",
    "dateTo": "date_to",
    "prestador": "prestador",
    "procedimento": "procedimento",
}

Payload = Union[None, str, Dict[str, Any], List[Any]]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return all(_is_blank(item) for item in value)
    return False


def _criteria_value(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if _is_blank(value):
        return None
    if not isinstance(value, (str, int)):
        raise ValidationError(f"Invalid value for {key}", field=key)
    return str(value).strip()


def _parse_operator(raw: Any, field_key: str) -> FilterOperator:
    try:
        return FilterOperator(raw)
    except ValueError:
        raise ValidationError(f"Unknown operator '{raw}' for field {field_key}", field=field_key)


def _parse_connector(raw: Any, field_key: str) -> LogicalOperator:
    if raw in (None, ""):
        return LogicalOperator.AND
    try:
        return LogicalOperator(str(raw).upper())
    except ValueError:
        raise ValidationError(f"Unknown logical operator '{raw}' for field {field_key}", field=field_key)


def _between_bounds(value: Any, field_key: str) -> Tuple[Any, Any]:
    if isinstance(value, dict):
        value = [value.get("from", value.get("start")), value.get("to", value.get("end"))]
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValidationError(f"'between' on {field_key} requires a [low, high] pair", field=field_key)
    low, high = (None if _is_blank(bound) else bound for bound in value)
    return low, high


def parse_clause(raw: Any, is_first: bool = False) -> Optional[FilterClause]:
    """Parse one clause; returns None for a clause with an empty field or value."""
    if not isinstance(raw, dict):
        raise ValidationError("Each filter must be an object", field="filters")

    field_key = raw.get("field")
    value = raw.get("value")
    if _is_blank(field_key) or _is_blank(value):
        return None
    if not isinstance(field_key, str):
        raise ValidationError("Filter field must be a field name", field="filters")

    definition = FILTERABLE_FIELDS.get(field_key)
    if definition is None:
        raise ValidationError(f"Unknown filter field '{field_key}'", field=field_key)

    operator = _parse_operator(raw.get("operator", FilterOperator.EQUALS.value), field_key)
    if operator in TEXT_ONLY_OPERATORS and not definition.is_text:
        raise ValidationError(
            f"Operator '{operator.value}' only applies to text fields, not {field_key}", field=field_key
        )

    if operator == FilterOperator.BETWEEN:
        value = _between_bounds(value, field_key)
    elif isinstance(value, (list, tuple, dict)):
        raise ValidationError(f"Operator '{operator.value}' on {field_key} requires a single value", field=field_key)

    # The first clause has nothing to its left, so its connector carries no meaning
    connector = LogicalOperator.AND if is_first else _parse_connector(raw.get("logicalOperator"), field_key)
    return FilterClause(field=field_key, operator=operator, value=value, logical_operator=connector)


def parse_clauses(items: Iterable[Any]) -> Tuple[FilterClause, ...]:
    clauses: List[FilterClause] = []
    for item in items:
        clause = parse_clause(item, is_first=not clauses)
        if clause is not None:
            clauses.append(clause)
    return tuple(clauses)


def _indexed_filters(payload: Dict[str, Any]) -> List[Any]:
    indexed = []
    for key, item in payload.items():
        match = FILTER_KEY_PATTERN.match(key)
        if match:
            indexed.append((int(match.group(1)), item))
    return [item for _, item in sorted(indexed, key=lambda entry: entry[0])]


def parse_filters(payload: Payload) -> ReportFilter:
    """
    Accepts the ``filters`` payload in any of the shapes clients send:

    * ``None`` or an empty string: no filter at all
    * a JSON string holding one of the shapes below
    * an object with the fixed criteria keys and/or ``filter_<n>`` clause entries
      (an optional ``filters`` key may hold a list of clauses as well)
    * a list of clause objects
    """
    if payload is None:
        return ReportFilter()

    if isinstance(payload, str):
        if not payload.strip():
            return ReportFilter()
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            raise ValidationError("filters must be valid JSON", field="filters")
        if payload is None:
            return ReportFilter()

    if isinstance(payload, list):
        return ReportFilter(clauses=parse_clauses(payload))

    if not isinstance(payload, dict):
        raise ValidationError("filters must be a JSON object or list", field="filters")

    criteria = ReportCriteria(**{attr: _criteria_value(payload, key) for key, attr in CRITERIA_KEYS.items()})

    items = _indexed_filters(payload)
    nested = payload.get("filters")
    if isinstance(nested, list):
        items.extend(nested)
    elif nested is not None:
        raise ValidationError("filters must be a list of clauses", field="filters")

    return ReportFilter(criteria=criteria, clauses=parse_clauses(items))
