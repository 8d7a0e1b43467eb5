"""Click command classes with wider help output."""

from __future__ import annotations

import click

HELP_WIDTH = 88


class RichCommand(click.Command):
    """Click command whose help is wrapped at 88 columns."""

    def get_help(self, ctx: click.Context) -> str:
        formatter = click.HelpFormatter(width=HELP_WIDTH)
        self.format_help(ctx, formatter)
        return formatter.getvalue()


class RichGroup(click.Group):
    """Click group whose help is wrapped at 88 columns."""

    def get_help(self, ctx: click.Context) -> str:
        formatter = click.HelpFormatter(width=HELP_WIDTH)
        self.format_help(ctx, formatter)
        return formatter.getvalue()
