"""Validate command for report-engine CLI."""

from __future__ import annotations

import traceback
from pathlib import Path

import click
from rich.console import Console

from report_engine.acquisition.dispatcher import AcquisitionDispatcher
from report_engine.cli import RichCommand, format_error, format_success, format_warning
from report_engine.cli.commands._documents import (
    debug_option,
    load_documents,
    report_option,
    source_option,
)
from report_engine.cli.formatting import request_table
from report_engine.errors import ReportEngineError

console = Console()


@click.command(cls=RichCommand)
@source_option
@report_option
@debug_option
def validate(source_path: Path, report_path: Path, debug: bool) -> None:
    """Validate a report against its data source without fetching data.

    Checks that:
    - Both documents parse
    - The report selects columns from a single exposed table or view
    - Every referenced column exists
    - Every filter operator is legal for its column type

    Examples:

        rpe validate --source warehouse.yml --report orders.yml

        # Validate before running
        rpe validate -s warehouse.yml -r orders.yml && rpe run -s warehouse.yml -r orders.yml
    """
    data_source, report = load_documents(console, source_path, report_path, debug=debug)
    console.print(f"[green]Documents valid:[/green] {source_path.name}, {report_path.name}")

    try:
        request = AcquisitionDispatcher().check(data_source, report)
    except ReportEngineError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(format_error(e.user_message, str(e)))
        raise click.ClickException(f"{e.kind.value}: {e}")

    if request is None:
        console.print(
            format_warning(
                "Custom data source",
                "Rows are generated, so there is no live request to resolve.",
            )
        )
    else:
        console.print(request_table(request))
    console.print(format_success(f"Report '{report.name}' is valid"))
