"""Operators command for report-engine CLI."""

from __future__ import annotations

import click
from rich.console import Console

from report_engine.cli import RichCommand
from report_engine.cli.formatting import operators_table
from report_engine.domain.operators import operators_for
from report_engine.domain.schema import ColumnType

console = Console()


@click.command(cls=RichCommand)
@click.argument("column_type", required=False)
def operators(column_type: str | None) -> None:
    """Show the filter operators allowed for each column type.

    Types outside string, number, date, boolean and currency get the
    default operator set.

    Examples:

        # Full matrix
        rpe operators

        # One type
        rpe operators date
    """
    if column_type is None:
        for known in ColumnType:
            console.print(operators_table(known.value, operators_for(known)))
            console.print()
        console.print(operators_table("unknown", operators_for(None)))
        return

    name = column_type.lower()
    if name not in {t.value for t in ColumnType}:
        console.print(f"[yellow]'{column_type}' is not a known type, showing defaults[/yellow]")
    console.print(operators_table(name, operators_for(name)))
