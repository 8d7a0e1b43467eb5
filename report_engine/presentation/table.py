"""Presentation - turn raw acquired rows into a display-ready table and series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from report_engine.domain.formatting import FormattingConfig
from report_engine.domain.report import ReportConfig, Row, VisualizationType
from report_engine.domain.schema import ColumnType, DataSource
from report_engine.presentation.formatters import display_text, format_value
from report_engine.resolution.fields import FieldResolver
from report_engine.resolution.labels import LabelResolver, unqualified


@dataclass(frozen=True)
class ColumnPresentation:
    """How one returned key is shown."""

    key: str
    label: str
    column_type: ColumnType | str | None = None
    formatting: FormattingConfig | None = None


@dataclass
class PresentedReport:
    """
    A report's rows ready for a table or chart.

    Attributes:
        visualization: The report's visualization type
        columns: Column presentations in first-seen key order
        rows: Formatted rows, every key present as a string
        raw_rows: Rows as returned by acquisition
        label_key: Key used for chart labels
        value_key: Key used for chart values
    """

    visualization: VisualizationType = VisualizationType.TABLE
    columns: list[ColumnPresentation] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)
    raw_rows: list[Row] = field(default_factory=list)
    label_key: str | None = None
    value_key: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.raw_rows

    @property
    def keys(self) -> list[str]:
        return [c.key for c in self.columns]

    def label(self, key: str) -> str:
        for column in self.columns:
            if column.key == key:
                return column.label
        return key

    def series(self) -> list[tuple[str, Any]]:
        """(label, value) pairs for charting, using raw values."""
        if self.label_key is None or self.value_key is None:
            return []
        return [
            (display_text(row.get(self.label_key)), row.get(self.value_key))
            for row in self.raw_rows
        ]


def row_keys(rows: list[Row]) -> list[str]:
    """Union of row keys in first-seen order."""
    keys: list[str] = []
    seen: set[str] = set()
    for row in rows:
        if not isinstance(row, dict):
            continue
        for key in row:
            if key not in seen:
                seen.add(key)
                keys.append(key)
    return keys


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def chart_keys(rows: list[Row], keys: list[str]) -> tuple[str | None, str | None]:
    """Pick (label_key, value_key) from the first row."""
    if not keys:
        return None, None
    first = rows[0] if rows and isinstance(rows[0], dict) else {}

    value_key = next((k for k in keys if _is_number(first.get(k))), None)
    if value_key is None:
        value_key = keys[1] if len(keys) > 1 else keys[0]

    label_key = next((k for k in keys if isinstance(first.get(k), str)), keys[0])
    return label_key, value_key


def _column_for_key(
    key: str,
    labels: LabelResolver,
    resolver: FieldResolver | None,
) -> ColumnPresentation:
    bare = unqualified(key)
    label = labels.label_for(key)
    selected = labels.report_column_for(bare)
    if selected is None:
        return ColumnPresentation(key=key, label=label)

    column_type: ColumnType | str | None = None
    if resolver is not None:
        resolved = resolver.try_resolve(selected)
        if resolved is not None:
            column_type = resolved.column_type
    return ColumnPresentation(
        key=key,
        label=label,
        column_type=column_type,
        formatting=selected.formatting,
    )


def present(
    rows: list[Row],
    report: ReportConfig,
    data_source: DataSource | None,
    *,
    now: datetime | None = None,
) -> PresentedReport:
    """
    Format acquired rows for display.

    Per-key formatting comes from the matching selected column; keys with no
    matching column are rendered as-is. Never raises on row content.

    Args:
        rows: Rows returned by acquisition
        report: The report being presented
        data_source: Its data source, for labels and column types
        now: Reference time for relative dates

    Returns:
        PresentedReport with formatted rows and chart keys
    """
    rows = [row for row in rows if isinstance(row, dict)]
    keys = row_keys(rows)

    labels = LabelResolver(report, data_source)
    resolver = FieldResolver(data_source) if data_source is not None else None
    columns = [_column_for_key(key, labels, resolver) for key in keys]

    formatted = [
        {
            column.key: format_value(row.get(column.key), column.column_type, column.formatting, now=now)
            for column in columns
        }
        for row in rows
    ]

    label_key, value_key = chart_keys(rows, keys)
    return PresentedReport(
        visualization=report.visualization,
        columns=columns,
        rows=formatted,
        raw_rows=rows,
        label_key=label_key,
        value_key=value_key,
    )
