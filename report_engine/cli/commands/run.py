"""Run command for report-engine CLI."""

from __future__ import annotations

import asyncio
import traceback
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from report_engine.acquisition.dispatcher import AcquisitionDispatcher
from report_engine.acquisition.generative import GeminiDataGenerator
from report_engine.acquisition.http_query import HttpQueryDelegate
from report_engine.acquisition.session import ReportSession
from report_engine.cli import RichCommand, format_error, format_warning
from report_engine.cli.commands._documents import (
    debug_option,
    load_documents,
    report_option,
    source_option,
)
from report_engine.cli.formatting import result_table
from report_engine.config import RPEConfig, load_config
from report_engine.log import setup_logging

console = Console()


def _load_settings(config: Path | None, debug: bool) -> RPEConfig:
    try:
        return load_config(config)
    except FileNotFoundError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Config file not found:[/red] {e}")
        raise click.ClickException(str(e))
    except yaml.YAMLError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]YAML parsing error:[/red] {e}")
        raise click.ClickException(str(e))
    except ValidationError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Config validation error:[/red] {e}")
        raise click.ClickException(str(e))


def build_dispatcher(settings: RPEConfig, limit: int | None = None) -> AcquisitionDispatcher:
    """Dispatcher wired with the HTTP and Gemini delegates from config."""
    return AcquisitionDispatcher(
        HttpQueryDelegate.from_config(settings.api),
        GeminiDataGenerator.from_config(settings.generative),
        row_limit=limit or settings.acquisition.row_limit,
        row_count_hint=settings.acquisition.row_count_hint,
    )


@click.command(cls=RichCommand)
@source_option
@report_option
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to rpe.yml config file (auto-detected if not specified)",
)
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    help="Maximum rows to fetch (overrides acquisition.row_limit)",
)
@debug_option
def run(
    source_path: Path,
    report_path: Path,
    config: Path | None,
    limit: int | None,
    debug: bool,
) -> None:
    """Fetch a report's data and print the formatted result.

    Live sources are queried through the report API (api.base_url or
    RPE_API_URL). Custom sources are generated with Gemini and need
    GEMINI_API_KEY or a 'gemini-api-key' keychain entry.

    Examples:

        rpe run --source warehouse.yml --report orders.yml

        # First 100 rows, verbose logging to a file set in rpe.yml
        rpe run -s warehouse.yml -r orders.yml --limit 100 --config ./rpe.yml
    """
    settings = _load_settings(config, debug)
    setup_logging("DEBUG" if debug else settings.logging.level, settings.logging.file)

    data_source, report = load_documents(console, source_path, report_path, debug=debug)
    session = ReportSession(build_dispatcher(settings, limit), data_source, report)

    result = asyncio.run(session.refresh())

    if result.error is not None:
        if debug:
            cause = result.error.__cause__ or result.error
            console.print("".join(traceback.format_exception(cause)))
        console.print(format_error(result.error.user_message, str(result.error)))
        raise click.ClickException(f"{result.error.kind.value}: {result.error}")

    if result.presented.is_empty:
        console.print(format_warning(f"Report '{report.name}' returned no rows"))
        return

    console.print(result_table(result.presented, title=report.name))
    console.print(f"[dim]{len(result.rows)} rows[/dim]")
