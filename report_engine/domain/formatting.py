"""Formatting domain - per-column display configuration.

FormattingConfig is a tagged union keyed by ``type``. Each variant carries
only the fields meaningful for its column type.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from report_engine.domain.schema import ColumnType

_CONFIG = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class SymbolPosition(str, Enum):
    """Where the currency symbol goes."""

    BEFORE = "before"
    AFTER = "after"


class BooleanStyle(str, Enum):
    """Label pairs for boolean values."""

    TRUE_FALSE = "true/false"
    YES_NO = "yes/no"
    ONE_ZERO = "1/0"
    CHECK_X = "check/x"
    ENABLED_DISABLED = "enabled/disabled"


class TextCase(str, Enum):
    """Case transforms for string values."""

    NONE = "none"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    CAPITALIZE = "capitalize"


# Special date format values
DATE_FORMAT_ISO = "ISO"
DATE_FORMAT_RELATIVE = "relative"


class DateFormatting(BaseModel):
    """
    Date display.

    ``format`` is a token pattern (``MM/DD/YYYY``, ``MMM D, YYYY HH:mm``),
    ``ISO`` for ISO-8601 output, or ``relative`` for "3 days ago" style.
    """

    type: Literal["date"] = "date"
    format: str = "MM/DD/YYYY"

    model_config = _CONFIG


class NumberFormatting(BaseModel):
    """Number display. ``decimal_places=None`` keeps the natural precision."""

    type: Literal["number"] = "number"
    decimal_places: int | None = Field(None, ge=0, le=20)
    thousand_separator: bool = True
    prefix: str = ""
    suffix: str = ""

    model_config = _CONFIG


class CurrencyFormatting(BaseModel):
    """Currency display."""

    type: Literal["currency"] = "currency"
    symbol: str = "$"
    symbol_position: SymbolPosition = SymbolPosition.BEFORE
    decimal_places: int = Field(2, ge=0, le=20)
    thousand_separator: bool = True

    model_config = _CONFIG


class BooleanFormatting(BaseModel):
    """Boolean display."""

    type: Literal["boolean"] = "boolean"
    style: BooleanStyle = BooleanStyle.TRUE_FALSE

    model_config = _CONFIG


class StringFormatting(BaseModel):
    """
    String display.

    Truncation keeps ``max_length`` characters. With ``ellipsis`` the last
    kept character is replaced by an ellipsis, so the output never exceeds
    ``max_length``.
    """

    type: Literal["string"] = "string"
    case: TextCase = TextCase.NONE
    max_length: int | None = Field(None, ge=1)
    ellipsis: bool = True

    model_config = _CONFIG


FormattingConfig = Annotated[
    Union[
        DateFormatting,
        NumberFormatting,
        CurrencyFormatting,
        BooleanFormatting,
        StringFormatting,
    ],
    Field(discriminator="type"),
]


def default_formatting(column_type: ColumnType | str | None) -> FormattingConfig | None:
    """
    Type-derived default formatting for a freshly selected column.

    Unknown types get no formatting (identity rendering).
    """
    try:
        known = ColumnType(column_type) if column_type is not None else None
    except ValueError:
        return None

    if known is ColumnType.DATE:
        return DateFormatting()
    if known is ColumnType.NUMBER:
        return NumberFormatting()
    if known is ColumnType.CURRENCY:
        return CurrencyFormatting()
    if known is ColumnType.BOOLEAN:
        return BooleanFormatting()
    if known is ColumnType.STRING:
        return StringFormatting()
    return None
