"""Shared document loading for commands that take --source/--report."""

from __future__ import annotations

import json
import traceback
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource
from report_engine.ingestion import load_data_source, load_report

source_option = click.option(
    "--source",
    "-s",
    "source_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Data source document (YAML or JSON)",
)
report_option = click.option(
    "--report",
    "-r",
    "report_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Report document (YAML or JSON)",
)
debug_option = click.option(
    "--debug",
    is_flag=True,
    help="Show full exception stacktraces for troubleshooting",
)


def load_documents(
    console: Console, source_path: Path, report_path: Path, *, debug: bool
) -> tuple[DataSource, ReportConfig]:
    """Load both documents, turning parse failures into ClickExceptions."""
    try:
        return load_data_source(source_path), load_report(report_path)
    except FileNotFoundError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]File not found:[/red] {e}")
        raise click.ClickException(str(e))
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Parse error:[/red] {e}")
        raise click.ClickException(str(e))
    except ValidationError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Document validation error:[/red] {e}")
        raise click.ClickException(str(e))
    except ValueError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Invalid document:[/red] {e}")
        raise click.ClickException(str(e))
