"""Rich formatting utilities for CLI output.

Panels for errors, warnings and successes, and tables for the operator
matrix, resolved requests and report results.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from report_engine.acquisition.request import AcquisitionRequest
from report_engine.domain.operators import OperatorSpec
from report_engine.presentation.table import PresentedReport

PANEL_WIDTH = 78


def _panel(message: str, extra: str | None, title: str, color: str) -> Panel:
    content = f"[bold {color}]{escape(message)}[/bold {color}]"
    if extra:
        content += f"\n\n[dim]{escape(extra)}[/dim]"
    return Panel(
        content,
        title=f"[bold {color}]{title}[/bold {color}]",
        border_style=color,
        width=PANEL_WIDTH,
        expand=False,
    )


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: User-facing error message
        context: Optional technical detail shown dimmed

    Returns:
        Panel with error formatting
    """
    return _panel(message, context, "Error", "red")


def format_warning(message: str, context: str | None = None) -> Panel:
    """Create formatted warning panel."""
    return _panel(message, context, "Warning", "yellow")


def format_success(message: str, details: str | None = None) -> Panel:
    """Create formatted success panel."""
    return _panel(f"✓ {message}", details, "Success", "green")


def operators_table(type_name: str, specs: list[OperatorSpec]) -> Table:
    """Operators legal for one column type."""
    table = Table(title=f"Operators for [bold]{type_name}[/bold]", title_justify="left")
    table.add_column("Operator", style="cyan")
    table.add_column("Label")
    table.add_column("Values", justify="right")
    for spec in specs:
        table.add_row(spec.operator.value, spec.label, str(spec.arity))
    return table


def request_table(request: AcquisitionRequest) -> Table:
    """Summary of a resolved acquisition request."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Table", request.table)
    table.add_row("Columns", ", ".join(request.columns))
    for f in request.filters:
        values = [v for v in (f.value, f.value2) if v is not None]
        suffix = f" {' and '.join(str(v) for v in values)}" if values else ""
        table.add_row("Filter", f"{f.column} {f.operator.value}{suffix}")
    for s in request.sorts:
        table.add_row("Sort", f"{s.column} {s.direction.value}")
    table.add_row("Limit", f"{request.limit:,}")
    return table


def result_table(presented: PresentedReport, title: str | None = None) -> Table:
    """Formatted report rows."""
    table = Table(title=title, title_justify="left")
    for column in presented.columns:
        table.add_column(escape(column.label), overflow="fold")
    for row in presented.rows:
        table.add_row(*(escape(row.get(key, "")) for key in presented.keys))
    return table
