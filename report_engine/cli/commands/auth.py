"""Auth command group for report-engine.

Manages the Gemini API key used for custom data sources.
"""

from __future__ import annotations

import os

import click
from rich.console import Console

from report_engine.cli import RichCommand, RichGroup
from report_engine.credentials import GEMINI_API_KEY, env_var_for, get_credential_store

console = Console()


@click.command(cls=RichCommand)
def status() -> None:
    """Show whether the Gemini API key is configured."""
    store = get_credential_store()
    env_var = env_var_for(GEMINI_API_KEY)

    console.print()
    if store.exists(GEMINI_API_KEY):
        console.print("[green]✓[/green] Gemini:      Configured")
    else:
        console.print("[dim]○[/dim] Gemini:      Not configured")

    if os.environ.get(env_var):
        console.print(f"             [yellow]Note: {env_var} env var will override keychain[/yellow]")
    console.print()


@click.command(name="set", cls=RichCommand)
@click.option(
    "--api-key",
    prompt="Gemini API key",
    hide_input=True,
    help="Key to store (prompted for when omitted)",
)
def set_key(api_key: str) -> None:
    """Store the Gemini API key in the system keychain.

    Examples:

        # Prompt for the key
        rpe auth set
    """
    if not api_key.strip():
        raise click.BadParameter("API key cannot be empty", param_hint="--api-key")

    if get_credential_store().set(GEMINI_API_KEY, api_key.strip()):
        console.print("[green]✓[/green] Stored Gemini API key")
    else:
        raise click.ClickException(
            f"System keychain is not available. Set {env_var_for(GEMINI_API_KEY)} instead."
        )


@click.command(cls=RichCommand)
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def clear(force: bool) -> None:
    """Remove the stored Gemini API key."""
    if not force and not click.confirm("Clear the stored Gemini API key?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    if get_credential_store().delete(GEMINI_API_KEY):
        console.print("[green]✓[/green] Cleared Gemini API key")
    else:
        console.print("[dim]○[/dim] Gemini API key was not set")


@click.group(cls=RichGroup, invoke_without_command=True)
@click.pass_context
def auth(ctx: click.Context) -> None:
    """Manage the Gemini API key.

    When called without a subcommand, shows credential status.

    Examples:

        $ rpe auth
        $ rpe auth set
        $ rpe auth clear --force
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(status)


auth.add_command(status)
auth.add_command(set_key)
auth.add_command(clear)
