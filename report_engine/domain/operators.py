"""Type-operator matrix - which filter operators each column type allows."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from report_engine.domain.schema import ColumnType
from report_engine.errors import InvalidFilterValueError, InvalidOperatorForTypeError

if TYPE_CHECKING:
    from report_engine.domain.report import FilterCondition


class FilterOperator(str, Enum):
    """All filter operators known to the engine."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IN = "in"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    BETWEEN = "between"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"


class OperatorSpec(BaseModel):
    """An operator offered for a column type."""

    operator: FilterOperator
    label: str
    arity: int  # 0 = no value, 1 = value, 2 = value and value2

    model_config = {"frozen": True}


OPERATOR_LABELS: dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "Equals",
    FilterOperator.NOT_EQUALS: "Does Not Equal",
    FilterOperator.CONTAINS: "Contains",
    FilterOperator.NOT_CONTAINS: "Does Not Contain",
    FilterOperator.STARTS_WITH: "Starts With",
    FilterOperator.ENDS_WITH: "Ends With",
    FilterOperator.IS_EMPTY: "Is Empty",
    FilterOperator.IS_NOT_EMPTY: "Is Not Empty",
    FilterOperator.IN: "Is One Of",
    FilterOperator.GT: "Greater Than",
    FilterOperator.GTE: "Greater Than or Equal",
    FilterOperator.LT: "Less Than",
    FilterOperator.LTE: "Less Than or Equal",
    FilterOperator.BETWEEN: "Between",
    FilterOperator.IS_NULL: "Is Null",
    FilterOperator.IS_NOT_NULL: "Is Not Null",
    FilterOperator.TODAY: "Today",
    FilterOperator.THIS_WEEK: "This Week",
    FilterOperator.THIS_MONTH: "This Month",
    FilterOperator.THIS_YEAR: "This Year",
}

NULLARY_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.IS_NULL,
        FilterOperator.IS_NOT_NULL,
        FilterOperator.IS_EMPTY,
        FilterOperator.IS_NOT_EMPTY,
        FilterOperator.TODAY,
        FilterOperator.THIS_WEEK,
        FilterOperator.THIS_MONTH,
        FilterOperator.THIS_YEAR,
    }
)

BINARY_OPERATORS: frozenset[FilterOperator] = frozenset({FilterOperator.BETWEEN})

_STRING_OPERATORS = (
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.CONTAINS,
    FilterOperator.NOT_CONTAINS,
    FilterOperator.STARTS_WITH,
    FilterOperator.ENDS_WITH,
    FilterOperator.IS_EMPTY,
    FilterOperator.IS_NOT_EMPTY,
    FilterOperator.IN,
)

_NUMERIC_OPERATORS = (
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.GT,
    FilterOperator.GTE,
    FilterOperator.LT,
    FilterOperator.LTE,
    FilterOperator.BETWEEN,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
)

_DATE_OPERATORS = (
    *_NUMERIC_OPERATORS,
    FilterOperator.TODAY,
    FilterOperator.THIS_WEEK,
    FilterOperator.THIS_MONTH,
    FilterOperator.THIS_YEAR,
)

_BOOLEAN_OPERATORS = (
    FilterOperator.EQUALS,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
)

DEFAULT_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.CONTAINS,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
)

TYPE_OPERATORS: dict[ColumnType, tuple[FilterOperator, ...]] = {
    ColumnType.STRING: _STRING_OPERATORS,
    ColumnType.NUMBER: _NUMERIC_OPERATORS,
    ColumnType.CURRENCY: _NUMERIC_OPERATORS,
    ColumnType.DATE: _DATE_OPERATORS,
    ColumnType.BOOLEAN: _BOOLEAN_OPERATORS,
}


def operator_arity(operator: FilterOperator | str) -> int:
    """Number of literal values an operator needs (0, 1 or 2)."""
    op = FilterOperator(operator)
    if op in NULLARY_OPERATORS:
        return 0
    if op in BINARY_OPERATORS:
        return 2
    return 1


def _operators(column_type: ColumnType | str | None) -> tuple[FilterOperator, ...]:
    try:
        known = ColumnType(column_type) if column_type is not None else None
    except ValueError:
        known = None
    if known is None:
        return DEFAULT_OPERATORS
    return TYPE_OPERATORS[known]


def operators_for(column_type: ColumnType | str | None) -> list[OperatorSpec]:
    """
    Legal filter operators for a column type.

    Unknown types (any string outside ColumnType, or None) get the default set.
    """
    return [
        OperatorSpec(operator=op, label=OPERATOR_LABELS[op], arity=operator_arity(op))
        for op in _operators(column_type)
    ]


def is_operator_allowed(column_type: ColumnType | str | None, operator: str) -> bool:
    """Check if an operator is in the matrix for the column type."""
    try:
        op = FilterOperator(operator)
    except ValueError:
        return False
    return op in _operators(column_type)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def validate_filter(
    condition: FilterCondition,
    column_type: ColumnType | str | None,
    column: str | None = None,
) -> FilterOperator:
    """
    Check a filter's operator and values against its column type.

    Returns:
        The parsed operator

    Raises:
        InvalidOperatorForTypeError: Operator unknown or not legal for the type
        InvalidFilterValueError: Required value(s) missing
    """
    if isinstance(column_type, ColumnType):
        type_name = column_type.value
    else:
        type_name = column_type or "unknown"
    column = column or condition.column_id

    if not is_operator_allowed(column_type, condition.operator):
        raise InvalidOperatorForTypeError(condition.operator, type_name, column)

    op = FilterOperator(condition.operator)
    arity = operator_arity(op)
    if arity >= 1 and _is_blank(condition.value):
        raise InvalidFilterValueError(op.value, column, arity)
    if arity == 2 and _is_blank(condition.value2):
        raise InvalidFilterValueError(op.value, column, arity)
    return op
