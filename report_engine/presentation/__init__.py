"""Presentation layer - formatting and display-ready tables."""

from report_engine.presentation.formatters import display_text, format_value
from report_engine.presentation.table import (
    ColumnPresentation,
    PresentedReport,
    chart_keys,
    present,
    row_keys,
)

__all__ = [
    "ColumnPresentation",
    "PresentedReport",
    "chart_keys",
    "display_text",
    "format_value",
    "present",
    "row_keys",
]
