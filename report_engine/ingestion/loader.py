"""DocumentLoader - loads data source and report declarations from YAML/JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yml", ".yaml")


class DocumentLoader:
    """
    Load host-application documents.

    Handles:
    - YAML and JSON documents (chosen by file suffix)
    - camelCase keys as exported by the host application
    - Documents wrapped under a ``dataSource`` / ``report`` key
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        """Load and parse the document as a mapping."""
        if not self.path.is_file():
            raise FileNotFoundError(f"File not found: {self.path}")

        with open(self.path, encoding="utf-8") as f:
            if self.path.suffix.lower() in JSON_SUFFIXES:
                content = json.load(f)
            else:
                content = yaml.safe_load(f)

        if content is None:
            return {}

        if not isinstance(content, dict):
            raise ValueError(
                f"Expected a mapping at root of {self.path}, got {type(content).__name__}"
            )

        return content

    def load_data_source(self) -> DataSource:
        """Parse the document as a DataSource."""
        return DataSource.model_validate(self._unwrap(self.load(), "dataSource", "data_source"))

    def load_report(self) -> ReportConfig:
        """Parse the document as a ReportConfig."""
        return ReportConfig.model_validate(self._unwrap(self.load(), "report"))

    @staticmethod
    def _unwrap(content: dict[str, Any], *keys: str) -> dict[str, Any]:
        for key in keys:
            inner = content.get(key)
            if isinstance(inner, dict):
                return inner
        return content


def load_data_source(path: str | Path) -> DataSource:
    """Load a DataSource from a YAML or JSON file."""
    return DocumentLoader(path).load_data_source()


def load_report(path: str | Path) -> ReportConfig:
    """Load a ReportConfig from a YAML or JSON file."""
    return DocumentLoader(path).load_report()
