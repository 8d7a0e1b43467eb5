"""CLI utilities for report-engine.

Rich-based formatting helpers and Click command classes shared by the
commands in ``report_engine.cli.commands``.
"""

from __future__ import annotations

from report_engine.cli.formatting import (
    format_error,
    format_success,
    format_warning,
)
from report_engine.cli.help_formatter import RichCommand, RichGroup

__all__ = [
    "format_error",
    "format_success",
    "format_warning",
    "RichCommand",
    "RichGroup",
]
