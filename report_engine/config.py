"""Configuration schema for report-engine.

Defines the rpe.yml configuration file format using Pydantic models.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from typing_extensions import Self

from report_engine.acquisition.dispatcher import DEFAULT_ROW_COUNT_HINT, DEFAULT_ROW_LIMIT

# Fills api.base_url when the config leaves it empty
API_URL_ENV = "RPE_API_URL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ApiConfig(BaseModel):
    """Backend API used by the HTTP live query delegate."""

    base_url: str = Field("", validate_default=True)
    timeout: float = Field(30.0, gt=0)
    verify_ssl: bool = True

    model_config = {"frozen": True}

    @field_validator("base_url")
    @classmethod
    def default_from_env(cls, v: str) -> str:
        """Use RPE_API_URL when no base URL is configured."""
        if not v:
            v = os.environ.get(API_URL_ENV, "")
        return v.rstrip("/")


class AcquisitionConfig(BaseModel):
    """Dispatcher limits."""

    row_limit: int = Field(DEFAULT_ROW_LIMIT, gt=0)
    row_count_hint: int = Field(DEFAULT_ROW_COUNT_HINT, gt=0)

    model_config = {"frozen": True}


class GenerativeConfig(BaseModel):
    """Gemini settings for custom (generative) data sources."""

    model: str = "gemini-2.5-flash"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = Field(0.2, ge=0, le=2)
    timeout: float = Field(60.0, gt=0)

    model_config = {"frozen": True, "protected_namespaces": ()}


class LoggingConfig(BaseModel):
    """Log level and optional log file."""

    level: str = "INFO"
    file: str | None = None

    model_config = {"frozen": True}

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Validate level is a standard logging level name."""
        if v is None:
            return "INFO"
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Valid: {', '.join(LOG_LEVELS)}")
        return level


class RPEConfig(BaseModel):
    """
    Root configuration for report-engine.

    This is the schema for rpe.yml files. Every section is optional.

    Example:
        api:
          base_url: http://localhost:8000
          timeout: 30
          verify_ssl: true

        acquisition:
          row_limit: 5000000
          row_count_hint: 20

        generative:
          model: gemini-2.5-flash
          temperature: 0.2

        logging:
          level: INFO
          file: logs/rpe.log
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    acquisition: AcquisitionConfig = Field(default_factory=AcquisitionConfig)
    generative: GenerativeConfig = Field(default_factory=GenerativeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}

    @classmethod
    def from_yaml(cls, content: str) -> Self:
        """Parse config from YAML string."""
        data = yaml.safe_load(content)
        return cls.model_validate(data or {})

    @classmethod
    def from_file(cls, path: Path | str) -> Self:
        """Load config from a YAML file."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        return cls.from_yaml(content)


# Config file discovery
CONFIG_FILENAMES = ["rpe.yml", "rpe.yaml", ".rpe.yml", ".rpe.yaml"]


def find_config(start_dir: Path | str | None = None) -> Path | None:
    """
    Find rpe.yml config file.

    Searches start_dir (or the current working directory), then each parent
    directory up to the filesystem root.

    Args:
        start_dir: Directory to start search from

    Returns:
        Path to config file, or None if not found
    """
    current = Path(start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | str | None = None, *, required: bool = False) -> RPEConfig:
    """
    Load configuration from file.

    If path is not provided, searches for rpe.yml in current and parent
    directories and falls back to defaults when none exists.

    Args:
        path: Explicit path to config file
        required: Raise instead of using defaults when no file is found

    Returns:
        Parsed RPEConfig

    Raises:
        FileNotFoundError: If an explicit path is missing, or no file is found
            and ``required`` is set
        ValueError: If config is invalid
    """
    if path is None:
        path = find_config()
        if path is None:
            if required:
                raise FileNotFoundError(
                    "No rpe.yml found. Create one or specify path with --config"
                )
            return RPEConfig()
    else:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

    return RPEConfig.from_file(path)
