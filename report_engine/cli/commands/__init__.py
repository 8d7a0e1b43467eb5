"""CLI commands for report-engine.

Commands are registered on the ``rpe`` group in ``report_engine.__main__``.
"""

from __future__ import annotations

from report_engine.cli.commands.auth import auth
from report_engine.cli.commands.operators import operators
from report_engine.cli.commands.run import run
from report_engine.cli.commands.validate import validate

__all__ = [
    "auth",
    "operators",
    "run",
    "validate",
]
