"""Formatting pipeline - type-aware display formatting for returned values.

``format_value`` is total: malformed input degrades to its raw text and
never raises.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from dateutil import parser as date_parser

from report_engine.domain.formatting import (
    DATE_FORMAT_ISO,
    DATE_FORMAT_RELATIVE,
    BooleanFormatting,
    BooleanStyle,
    CurrencyFormatting,
    DateFormatting,
    FormattingConfig,
    NumberFormatting,
    StringFormatting,
    SymbolPosition,
    TextCase,
)
from report_engine.domain.schema import ColumnType

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Longest tokens first so MMMM wins over MM
DATE_TOKEN_PATTERN = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|DD|D|HH|hh|mm|ss|A")

BOOLEAN_LABELS: dict[BooleanStyle, tuple[str, str]] = {
    BooleanStyle.TRUE_FALSE: ("True", "False"),
    BooleanStyle.YES_NO: ("Yes", "No"),
    BooleanStyle.ONE_ZERO: ("1", "0"),
    BooleanStyle.CHECK_X: ("✓", "✗"),
    BooleanStyle.ENABLED_DISABLED: ("Enabled", "Disabled"),
}

TRUTHY_WORDS = frozenset({"true", "t", "yes", "y", "on", "1", "enabled", "checked"})
FALSY_WORDS = frozenset({"false", "f", "no", "n", "off", "0", "disabled", "unchecked"})

ELLIPSIS = "…"


def display_text(value: Any) -> str:
    """Generic stringification used when no formatting applies."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def format_value(
    raw: Any,
    column_type: ColumnType | str | None,
    formatting: FormattingConfig | None,
    *,
    now: datetime | None = None,
) -> str:
    """
    Format one value for display.

    Args:
        raw: Value as returned by acquisition
        column_type: The column's type (informational; the formatting variant decides)
        formatting: Column formatting, or None for identity rendering
        now: Reference time for relative dates (defaults to the current time)

    Returns:
        Display string. Never raises.
    """
    if raw is None:
        return ""
    if formatting is None:
        return display_text(raw)

    try:
        if isinstance(formatting, DateFormatting):
            return format_date(raw, formatting, now=now)
        if isinstance(formatting, NumberFormatting):
            return format_number(raw, formatting)
        if isinstance(formatting, CurrencyFormatting):
            return format_currency(raw, formatting)
        if isinstance(formatting, BooleanFormatting):
            return format_boolean(raw, formatting)
        if isinstance(formatting, StringFormatting):
            return format_string(raw, formatting)
    except Exception:
        # Formatting must never break a render
        return display_text(raw)
    return display_text(raw)


# --- Dates -----------------------------------------------------------------

# Two defaults differing in year, month and day
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(raw: Any) -> datetime | None:
    """Parse a date-like value. Returns None when it is not a date."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime.combine(raw, time())
    if not isinstance(raw, str) or not raw.strip():
        return None

    text = raw.strip()
    try:
        return date_parser.isoparse(text)
    except (ValueError, OverflowError):
        pass
    try:
        first = date_parser.parse(text, default=_PARSE_DEFAULTS[0])
        second = date_parser.parse(text, default=_PARSE_DEFAULTS[1])
    except (ValueError, OverflowError):
        return None
    # Any date part the text omits is filled from the default
    if first.date() != second.date():
        return None
    return first


def _render_token(token: str, value: datetime) -> str:
    if token == "YYYY":
        return f"{value.year:04d}"
    if token == "YY":
        return f"{value.year % 100:02d}"
    if token == "MMMM":
        return MONTH_NAMES[value.month - 1]
    if token == "MMM":
        return MONTH_NAMES[value.month - 1][:3]
    if token == "MM":
        return f"{value.month:02d}"
    if token == "M":
        return str(value.month)
    if token == "DD":
        return f"{value.day:02d}"
    if token == "D":
        return str(value.day)
    if token == "HH":
        return f"{value.hour:02d}"
    if token == "hh":
        return f"{(value.hour % 12) or 12:02d}"
    if token == "mm":
        return f"{value.minute:02d}"
    if token == "ss":
        return f"{value.second:02d}"
    if token == "A":
        return "AM" if value.hour < 12 else "PM"
    return token


def _relative(value: datetime, now: datetime) -> str:
    if value.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=value.tzinfo)
    elif value.tzinfo is None and now.tzinfo is not None:
        value = value.replace(tzinfo=now.tzinfo)

    days = (value.date() - now.date()).days
    if days == 0:
        return "today"
    if days == -1:
        return "yesterday"
    if days == 1:
        return "tomorrow"
    if days < 0:
        return f"{-days} days ago"
    return f"in {days} days"


def format_date(raw: Any, formatting: DateFormatting, *, now: datetime | None = None) -> str:
    """Format a date. Unparseable input is returned as its raw text."""
    value = parse_date(raw)
    if value is None:
        return display_text(raw)

    if formatting.format.upper() == DATE_FORMAT_ISO:
        return value.isoformat()
    if formatting.format.lower() == DATE_FORMAT_RELATIVE:
        return _relative(value, now or datetime.now())
    return DATE_TOKEN_PATTERN.sub(lambda m: _render_token(m.group(0), value), formatting.format)


# --- Numbers ---------------------------------------------------------------


def to_decimal(raw: Any) -> Decimal | None:
    """Coerce a value to a finite Decimal, or None when it is not numeric."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        number = raw
    elif isinstance(raw, int):
        number = Decimal(raw)
    elif isinstance(raw, float):
        number = Decimal(repr(raw))
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def _render_amount(number: Decimal, decimal_places: int | None, grouping: bool) -> str:
    """Render an absolute amount with optional rounding and grouping."""
    amount = abs(number)
    if decimal_places is not None:
        quantum = Decimal(1).scaleb(-decimal_places)
        with localcontext() as context:
            context.prec = max(context.prec, amount.adjusted() + 2 + decimal_places)
            amount = amount.quantize(quantum, rounding=ROUND_HALF_UP)
        spec = f"{',' if grouping else ''}.{decimal_places}f"
    else:
        spec = f"{',' if grouping else ''}f"
    return format(amount, spec)


def _is_negative(number: Decimal, rendered: str) -> bool:
    # -0.001 rounded to 2 places renders as 0.00 and carries no sign
    return number < 0 and any(ch not in "0.," for ch in rendered)


def format_number(raw: Any, formatting: NumberFormatting) -> str:
    """Format a number. Non-numeric input is returned as its raw text."""
    number = to_decimal(raw)
    if number is None:
        return display_text(raw)

    amount = _render_amount(number, formatting.decimal_places, formatting.thousand_separator)
    sign = "-" if _is_negative(number, amount) else ""
    return f"{formatting.prefix}{sign}{amount}{formatting.suffix}"


def format_currency(raw: Any, formatting: CurrencyFormatting) -> str:
    """Format a currency amount. Non-numeric input is returned as its raw text."""
    number = to_decimal(raw)
    if number is None:
        return display_text(raw)

    amount = _render_amount(number, formatting.decimal_places, formatting.thousand_separator)
    sign = "-" if _is_negative(number, amount) else ""
    if formatting.symbol_position is SymbolPosition.AFTER:
        return f"{sign}{amount}{formatting.symbol}"
    return f"{sign}{formatting.symbol}{amount}"


# --- Booleans --------------------------------------------------------------


def to_bool(raw: Any) -> bool | None:
    """Interpret a truthy/falsy value, or None when it is not boolean-like."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float, Decimal)):
        if raw == 1:
            return True
        if raw == 0:
            return False
        return None
    if isinstance(raw, str):
        word = raw.strip().lower()
        if word in TRUTHY_WORDS:
            return True
        if word in FALSY_WORDS:
            return False
    return None


def format_boolean(raw: Any, formatting: BooleanFormatting) -> str:
    """Format a boolean. Unrecognized input is returned as its raw text."""
    value = to_bool(raw)
    if value is None:
        return display_text(raw)
    true_label, false_label = BOOLEAN_LABELS[formatting.style]
    return true_label if value else false_label


# --- Strings ---------------------------------------------------------------


def _capitalize_words(text: str) -> str:
    return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), text)


def format_string(raw: Any, formatting: StringFormatting) -> str:
    """Apply the case transform, then truncation."""
    text = display_text(raw)

    if formatting.case is TextCase.UPPERCASE:
        text = text.upper()
    elif formatting.case is TextCase.LOWERCASE:
        text = text.lower()
    elif formatting.case is TextCase.CAPITALIZE:
        text = _capitalize_words(text)

    limit = formatting.max_length
    if limit is not None and len(text) > limit:
        if formatting.ellipsis and limit > 1:
            return text[: limit - 1] + ELLIPSIS
        return text[:limit]
    return text
