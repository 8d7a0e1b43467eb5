"""Tests for the type-operator matrix and filter validation."""

import pytest

from report_engine.domain.operators import (
    FilterOperator,
    is_operator_allowed,
    operator_arity,
    operators_for,
    validate_filter,
)
from report_engine.domain.report import FilterCondition
from report_engine.domain.schema import ColumnType
from report_engine.errors import (
    ErrorKind,
    InvalidFilterValueError,
    InvalidOperatorForTypeError,
)


def _ops(column_type) -> list[str]:
    return [spec.operator.value for spec in operators_for(column_type)]


def _filter(operator: str, value="x", value2=None) -> FilterCondition:
    return FilterCondition(
        id="f1", table_id="t", column_id="c", operator=operator, value=value, value2=value2
    )


class TestOperatorsFor:
    """Tests for operators_for."""

    def test_string_operators(self) -> None:
        """String columns get the text operator set."""
        assert _ops(ColumnType.STRING) == [
            "equals",
            "not_equals",
            "contains",
            "not_contains",
            "starts_with",
            "ends_with",
            "is_empty",
            "is_not_empty",
            "in",
        ]

    @pytest.mark.parametrize("column_type", [ColumnType.NUMBER, ColumnType.CURRENCY])
    def test_numeric_operators(self, column_type: ColumnType) -> None:
        """Number and currency share the comparison set."""
        assert _ops(column_type) == [
            "equals",
            "not_equals",
            "gt",
            "gte",
            "lt",
            "lte",
            "between",
            "is_null",
            "is_not_null",
        ]

    def test_date_operators_add_relative_periods(self) -> None:
        """Dates get comparisons plus relative periods."""
        ops = _ops(ColumnType.DATE)
        assert ops[:9] == _ops(ColumnType.NUMBER)
        assert ops[9:] == ["today", "this_week", "this_month", "this_year"]

    def test_boolean_operators(self) -> None:
        """Booleans only compare for equality or null."""
        assert _ops(ColumnType.BOOLEAN) == ["equals", "is_null", "is_not_null"]

    @pytest.mark.parametrize("column_type", ["json", "geometry", None])
    def test_unknown_type_gets_default_set(self, column_type) -> None:
        """Unknown types fall back to the default operators."""
        assert _ops(column_type) == ["equals", "not_equals", "contains", "is_null", "is_not_null"]

    def test_plain_strings_accepted_for_known_types(self) -> None:
        """Type names given as plain strings resolve to the same set."""
        assert _ops("boolean") == _ops(ColumnType.BOOLEAN)

    @pytest.mark.parametrize("column_type", [*ColumnType, "unknown"])
    def test_non_empty_and_duplicate_free(self, column_type) -> None:
        """Every set is non-empty without duplicates."""
        ops = _ops(column_type)
        assert ops
        assert len(ops) == len(set(ops))

    def test_text_operators_never_offered_for_numbers(self) -> None:
        """Text-only operators stay out of numeric sets."""
        for column_type in (ColumnType.NUMBER, ColumnType.CURRENCY, ColumnType.BOOLEAN):
            assert "starts_with" not in _ops(column_type)
            assert "contains" not in _ops(column_type)

    def test_specs_carry_labels_and_arity(self) -> None:
        """Specs expose a label and how many values they need."""
        specs = {s.operator: s for s in operators_for(ColumnType.DATE)}
        assert specs[FilterOperator.BETWEEN].arity == 2
        assert specs[FilterOperator.TODAY].arity == 0
        assert specs[FilterOperator.GT].label == "Greater Than"


class TestArity:
    """Tests for operator_arity."""

    @pytest.mark.parametrize(
        "operator,expected",
        [
            ("is_null", 0),
            ("is_not_empty", 0),
            ("this_year", 0),
            ("between", 2),
            ("equals", 1),
            ("in", 1),
        ],
    )
    def test_arity(self, operator: str, expected: int) -> None:
        """Arity follows the operator family."""
        assert operator_arity(operator) == expected


class TestIsOperatorAllowed:
    """Tests for is_operator_allowed."""

    def test_allowed(self) -> None:
        """Operators in the set are allowed."""
        assert is_operator_allowed(ColumnType.CURRENCY, "gt") is True

    def test_not_allowed(self) -> None:
        """Operators outside the set are rejected."""
        assert is_operator_allowed(ColumnType.NUMBER, "starts_with") is False

    def test_unknown_operator(self) -> None:
        """Operators the engine does not know are never allowed."""
        assert is_operator_allowed(ColumnType.STRING, "regex") is False


class TestValidateFilter:
    """Tests for validate_filter."""

    def test_valid_filter_returns_operator(self) -> None:
        """A legal filter returns the parsed operator."""
        assert validate_filter(_filter("gt", 100), ColumnType.CURRENCY) is FilterOperator.GT

    def test_illegal_operator(self) -> None:
        """Operators outside the matrix raise InvalidOperatorForType."""
        with pytest.raises(InvalidOperatorForTypeError) as exc_info:
            validate_filter(_filter("contains"), ColumnType.NUMBER, "total")

        error = exc_info.value
        assert error.kind is ErrorKind.INVALID_OPERATOR_FOR_TYPE
        assert error.operator == "contains"
        assert error.column_type == "number"
        assert "total" in str(error)

    def test_unknown_type_named_unknown(self) -> None:
        """Errors on unknown types name the stored type string."""
        with pytest.raises(InvalidOperatorForTypeError) as exc_info:
            validate_filter(_filter("gt", 1), "json")
        assert exc_info.value.column_type == "json"

    def test_missing_value(self) -> None:
        """Unary operators need a value."""
        with pytest.raises(InvalidFilterValueError) as exc_info:
            validate_filter(_filter("equals", "  "), ColumnType.STRING)
        assert exc_info.value.expected == 1

    def test_between_needs_second_value(self) -> None:
        """between needs value2."""
        with pytest.raises(InvalidFilterValueError) as exc_info:
            validate_filter(_filter("between", 1), ColumnType.NUMBER)
        assert exc_info.value.kind is ErrorKind.INVALID_FILTER_VALUE
        assert exc_info.value.expected == 2

    def test_nullary_ignores_value(self) -> None:
        """Operators without values pass with a blank value."""
        assert validate_filter(_filter("is_null", ""), ColumnType.DATE) is FilterOperator.IS_NULL

    def test_zero_is_a_value(self) -> None:
        """0 and False are real values, not blanks."""
        assert validate_filter(_filter("equals", 0), ColumnType.NUMBER) is FilterOperator.EQUALS
        assert validate_filter(_filter("equals", False), ColumnType.BOOLEAN) is FilterOperator.EQUALS
