"""Logging helpers for report-engine.

The library only creates module loggers. Handlers are attached by the
application (or the CLI) through ``setup_logging``.
"""

from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "report_engine"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Keys never written to log context
SECRET_KEYS = frozenset({"password", "api_key", "apiKey", "token"})


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger under the report_engine namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure the report_engine root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives DEBUG and above
        console_output: Attach a Rich console handler

    Returns:
        The configured root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else getattr(logging, level.upper()))

    # Avoid duplicate handlers when called more than once
    logger.handlers.clear()

    if console_output:
        console_handler = RichHandler(show_path=False, rich_tracebacks=True)
        console_handler.setLevel(getattr(logging, level.upper()))
        logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def redact(context: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a context dict with secret values masked."""
    safe: dict[str, Any] = {}
    for key, value in context.items():
        if key in SECRET_KEYS and value:
            safe[key] = "***"
        elif isinstance(value, dict):
            safe[key] = redact(value)
        else:
            safe[key] = value
    return safe


def log_error_with_context(
    logger: logging.Logger,
    message: str,
    error: BaseException,
    context: dict[str, Any] | None = None,
) -> None:
    """
    Record an error together with a structured context dict.

    Args:
        logger: Logger to write to
        message: Human-readable summary
        error: The underlying exception
        context: Extra details (request shape, source id, ...); secrets are masked
    """
    details: dict[str, Any] = {
        "message": message,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if context:
        details["context"] = redact(context)

    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    logger.error(f"{message}: {details}\n{trace}")
