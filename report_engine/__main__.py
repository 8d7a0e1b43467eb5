"""Command-line interface for report-engine."""

from __future__ import annotations

import click

from report_engine.cli import RichGroup
from report_engine.cli.commands import auth, operators, run, validate


@click.group(cls=RichGroup)
@click.version_option(package_name="report-engine")
def cli() -> None:
    """Validate and run report declarations against discovered schemas.

    Check a report without fetching data:

        $ rpe validate --source warehouse.yml --report orders.yml

    Fetch and print the formatted result:

        $ rpe run --source warehouse.yml --report orders.yml
    """
    pass


cli.add_command(operators)
cli.add_command(validate)
cli.add_command(run)
cli.add_command(auth)


if __name__ == "__main__":
    cli()
