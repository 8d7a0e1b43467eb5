"""Tests for the formatting pipeline."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from report_engine.domain.formatting import (
    BooleanFormatting,
    CurrencyFormatting,
    DateFormatting,
    NumberFormatting,
    StringFormatting,
    default_formatting,
)
from report_engine.domain.schema import ColumnType
from report_engine.presentation.formatters import display_text, format_value


class TestIdentity:
    """Rendering without formatting."""

    def test_none_is_empty(self) -> None:
        """Nulls render as empty strings, with or without formatting."""
        assert format_value(None, ColumnType.STRING, None) == ""
        assert format_value(None, ColumnType.NUMBER, NumberFormatting()) == ""

    def test_scalars(self) -> None:
        """Scalars are stringified."""
        assert format_value("abc", None, None) == "abc"
        assert format_value(12, None, None) == "12"
        assert format_value(1.5, None, None) == "1.5"

    def test_booleans_lowercase(self) -> None:
        """Booleans render as true/false."""
        assert format_value(True, None, None) == "true"
        assert format_value(False, None, None) == "false"

    def test_structures_json_encoded(self) -> None:
        """Dicts and lists render as JSON."""
        assert format_value({"a": 1}, "json", None) == '{"a": 1}'
        assert format_value([1, "x"], "json", None) == '[1, "x"]'

    def test_display_text_unserializable(self) -> None:
        """Objects JSON cannot encode still render."""
        assert display_text({"when": date(2024, 1, 2)}) == '{"when": "2024-01-02"}'


class TestDates:
    """Date formatting."""

    def test_default_pattern(self) -> None:
        """MM/DD/YYYY on an ISO date."""
        assert format_value("2024-01-15", ColumnType.DATE, DateFormatting(format="MM/DD/YYYY")) == "01/15/2024"

    def test_malformed_returned_unchanged(self) -> None:
        """Unparseable input is returned as-is."""
        assert format_value("not-a-date", ColumnType.DATE, DateFormatting()) == "not-a-date"

    def test_non_string_non_date_unchanged(self) -> None:
        """Numbers are not dates."""
        assert format_value(12345, ColumnType.DATE, DateFormatting()) == "12345"

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("YYYY-MM-DD", "2024-03-05"),
            ("D/M/YY", "5/3/24"),
            ("MMMM D, YYYY", "March 5, 2024"),
            ("MMM DD YYYY HH:mm:ss", "Mar 05 2024 14:07:09"),
            ("hh:mm A", "02:07 PM"),
        ],
    )
    def test_tokens(self, pattern: str, expected: str) -> None:
        """Each token renders its component."""
        value = datetime(2024, 3, 5, 14, 7, 9)
        assert format_value(value, ColumnType.DATE, DateFormatting(format=pattern)) == expected

    def test_date_objects(self) -> None:
        """date objects are formatted like datetimes at midnight."""
        assert format_value(date(2024, 12, 31), ColumnType.DATE, DateFormatting()) == "12/31/2024"

    def test_iso(self) -> None:
        """ISO renders ISO-8601."""
        result = format_value("2024-01-15T10:30:00", ColumnType.DATE, DateFormatting(format="ISO"))
        assert result == "2024-01-15T10:30:00"

    def test_general_parser_fallback(self) -> None:
        """Non-ISO strings go through the general parser."""
        assert format_value("Jan 15 2024", ColumnType.DATE, DateFormatting()) == "01/15/2024"

    @pytest.mark.parametrize("raw", ["12", "March", "Monday", "5 pm", "100"])
    def test_partial_dates_unchanged(self, raw: str) -> None:
        """Text missing a year, month or day is not completed from the clock."""
        assert format_value(raw, ColumnType.DATE, DateFormatting(format="MM/DD/YYYY")) == raw

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2024-06-10", "today"),
            ("2024-06-09", "yesterday"),
            ("2024-06-11", "tomorrow"),
            ("2024-06-07", "3 days ago"),
            ("2024-06-15", "in 5 days"),
        ],
    )
    def test_relative(self, raw: str, expected: str) -> None:
        """Relative dates are measured against now."""
        now = datetime(2024, 6, 10, 18, 0)
        formatting = DateFormatting(format="relative")
        assert format_value(raw, ColumnType.DATE, formatting, now=now) == expected


class TestNumbers:
    """Number formatting."""

    def test_two_places_with_grouping(self) -> None:
        """1234.567 rounds to 1,234.57."""
        formatting = NumberFormatting(decimal_places=2, thousand_separator=True)
        assert format_value(1234.567, ColumnType.NUMBER, formatting) == "1,234.57"

    def test_round_half_up(self) -> None:
        """Halves round away from zero."""
        formatting = NumberFormatting(decimal_places=1)
        assert format_value(0.25, ColumnType.NUMBER, formatting) == "0.3"
        assert format_value(2.5, ColumnType.NUMBER, NumberFormatting(decimal_places=0)) == "3"

    def test_natural_precision(self) -> None:
        """Without decimal places the value keeps its precision."""
        assert format_value(1234567.5, ColumnType.NUMBER, NumberFormatting()) == "1,234,567.5"
        assert format_value(42, ColumnType.NUMBER, NumberFormatting()) == "42"

    def test_no_grouping(self) -> None:
        """Grouping can be turned off."""
        formatting = NumberFormatting(decimal_places=0, thousand_separator=False)
        assert format_value(1234567, ColumnType.NUMBER, formatting) == "1234567"

    def test_prefix_suffix(self) -> None:
        """Prefix and suffix wrap the number."""
        formatting = NumberFormatting(decimal_places=1, suffix="%")
        assert format_value(12.34, ColumnType.NUMBER, formatting) == "12.3%"

    def test_negative(self) -> None:
        """Negative numbers keep their sign."""
        assert format_value(-1234.5, ColumnType.NUMBER, NumberFormatting(decimal_places=2)) == "-1,234.50"

    def test_negative_rounding_to_zero_drops_sign(self) -> None:
        """A value that rounds to zero has no minus sign."""
        assert format_value(-0.001, ColumnType.NUMBER, NumberFormatting(decimal_places=2)) == "0.00"

    def test_numeric_strings(self) -> None:
        """Strings with grouping commas are parsed."""
        formatting = NumberFormatting(decimal_places=2)
        assert format_value("1,234.5", ColumnType.NUMBER, formatting) == "1,234.50"
        assert format_value(Decimal("7.125"), ColumnType.NUMBER, formatting) == "7.13"

    @pytest.mark.parametrize("raw", ["n/a", "", True, float("nan"), float("inf"), [1]])
    def test_non_numeric_unchanged(self, raw) -> None:
        """Non-numeric input is returned as raw text."""
        assert format_value(raw, ColumnType.NUMBER, NumberFormatting()) == display_text(raw)


class TestCurrency:
    """Currency formatting."""

    def test_symbol_before(self) -> None:
        """99.99 with $ before."""
        formatting = CurrencyFormatting(
            symbol="$", symbol_position="before", decimal_places=2, thousand_separator=True
        )
        assert format_value(99.99, ColumnType.CURRENCY, formatting) == "$99.99"

    def test_symbol_after(self) -> None:
        """Symbols can follow the amount."""
        formatting = CurrencyFormatting(symbol="€", symbol_position="after")
        assert format_value(1234.5, ColumnType.CURRENCY, formatting) == "1,234.50€"

    def test_negative_sign_before_symbol(self) -> None:
        """The minus sign leads the symbol."""
        assert format_value(-1, ColumnType.CURRENCY, CurrencyFormatting()) == "-$1.00"

    def test_defaults(self) -> None:
        """Defaults are $ before with two places and grouping."""
        assert format_value(1000000, ColumnType.CURRENCY, CurrencyFormatting()) == "$1,000,000.00"

    def test_large_amounts(self) -> None:
        """Amounts beyond the default decimal precision still format."""
        expected = "$1," + ",".join(["000"] * 10) + ".00"
        assert format_value(1e30, ColumnType.CURRENCY, CurrencyFormatting()) == expected

    def test_non_numeric_unchanged(self) -> None:
        """Text amounts are returned unchanged."""
        assert format_value("free", ColumnType.CURRENCY, CurrencyFormatting()) == "free"


class TestBooleans:
    """Boolean formatting."""

    def test_yes_no(self) -> None:
        """True renders Yes."""
        assert format_value(True, ColumnType.BOOLEAN, BooleanFormatting(style="yes/no")) == "Yes"

    @pytest.mark.parametrize(
        "style,expected",
        [
            ("true/false", ("True", "False")),
            ("yes/no", ("Yes", "No")),
            ("1/0", ("1", "0")),
            ("check/x", ("✓", "✗")),
            ("enabled/disabled", ("Enabled", "Disabled")),
        ],
    )
    def test_styles(self, style: str, expected: tuple[str, str]) -> None:
        """Each style has its label pair."""
        formatting = BooleanFormatting(style=style)
        assert format_value(True, ColumnType.BOOLEAN, formatting) == expected[0]
        assert format_value(False, ColumnType.BOOLEAN, formatting) == expected[1]

    @pytest.mark.parametrize("raw", [1, "1", "yes", "Y", "on", "TRUE", "enabled", "checked"])
    def test_truthy_inputs(self, raw) -> None:
        """Truthy words and numbers are recognized."""
        assert format_value(raw, ColumnType.BOOLEAN, BooleanFormatting(style="yes/no")) == "Yes"

    @pytest.mark.parametrize("raw", [0, "0", "no", "n", "off", "False", "disabled"])
    def test_falsy_inputs(self, raw) -> None:
        """Falsy words and numbers are recognized."""
        assert format_value(raw, ColumnType.BOOLEAN, BooleanFormatting(style="yes/no")) == "No"

    def test_unrecognized_unchanged(self) -> None:
        """Other values are returned as raw text."""
        assert format_value("maybe", ColumnType.BOOLEAN, BooleanFormatting()) == "maybe"
        assert format_value(2, ColumnType.BOOLEAN, BooleanFormatting()) == "2"


class TestStrings:
    """String formatting."""

    @pytest.mark.parametrize(
        "case,expected",
        [
            ("none", "hello big World"),
            ("uppercase", "HELLO BIG WORLD"),
            ("lowercase", "hello big world"),
            ("capitalize", "Hello Big World"),
        ],
    )
    def test_case(self, case: str, expected: str) -> None:
        """Case transforms apply to the whole value."""
        formatting = StringFormatting(case=case)
        assert format_value("hello big World", ColumnType.STRING, formatting) == expected

    def test_truncate_with_ellipsis(self) -> None:
        """Ellipsis replaces the last kept character."""
        formatting = StringFormatting(max_length=5)
        result = format_value("abcdefgh", ColumnType.STRING, formatting)
        assert result == "abcd…"
        assert len(result) == 5

    def test_truncate_without_ellipsis(self) -> None:
        """Without ellipsis the value is cut."""
        formatting = StringFormatting(max_length=3, ellipsis=False)
        assert format_value("abcdefgh", ColumnType.STRING, formatting) == "abc"

    def test_short_values_untouched(self) -> None:
        """Values within max_length are not changed."""
        assert format_value("abc", ColumnType.STRING, StringFormatting(max_length=3)) == "abc"

    def test_case_before_truncation(self) -> None:
        """Case is applied before truncating."""
        formatting = StringFormatting(case="uppercase", max_length=4)
        assert format_value("abcdef", ColumnType.STRING, formatting) == "ABC…"

    def test_non_string_input(self) -> None:
        """Non-strings are stringified first."""
        assert format_value(12345, ColumnType.STRING, StringFormatting(max_length=3, ellipsis=False)) == "123"


class TestDefaultFormatting:
    """Tests for default_formatting."""

    @pytest.mark.parametrize(
        "column_type,expected",
        [
            (ColumnType.DATE, DateFormatting),
            (ColumnType.NUMBER, NumberFormatting),
            (ColumnType.CURRENCY, CurrencyFormatting),
            (ColumnType.BOOLEAN, BooleanFormatting),
            (ColumnType.STRING, StringFormatting),
            ("currency", CurrencyFormatting),
        ],
    )
    def test_type_derived(self, column_type, expected) -> None:
        """Each known type gets its own variant."""
        assert isinstance(default_formatting(column_type), expected)

    def test_unknown_type(self) -> None:
        """Unknown types get no formatting."""
        assert default_formatting("json") is None
        assert default_formatting(None) is None

    def test_defaults_are_independent(self) -> None:
        """Each call returns a fresh config."""
        assert default_formatting(ColumnType.DATE) == DateFormatting(format="MM/DD/YYYY")
        assert default_formatting(ColumnType.CURRENCY).symbol == "$"
