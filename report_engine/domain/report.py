"""Report domain - the declarative report configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from report_engine.domain.formatting import FormattingConfig

# One returned data row, keyed by field name
Row = dict[str, Any]


class Aggregation(str, Enum):
    """Per-column aggregation."""

    NONE = "none"
    SUM = "sum"
    AVG = "avg"
    COUNT = "count"
    MIN = "min"
    MAX = "max"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class VisualizationType(str, Enum):
    """How the report is displayed."""

    TABLE = "table"
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"


class Visibility(str, Enum):
    """Who can see the report."""

    PUBLIC = "public"
    PRIVATE = "private"


class ScheduleFrequency(str, Enum):
    """Snapshot schedule frequency."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReportColumn(BaseModel):
    """
    One selected field.

    ``table_id``/``column_id`` are references: an id, or a name.
    """

    table_id: str
    column_id: str
    alias: str | None = None
    aggregation: Aggregation | None = None
    formatting: FormattingConfig | None = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class FilterCondition(BaseModel):
    """A filter on one column. ``value2`` is only used by range operators."""

    id: str
    table_id: str
    column_id: str
    operator: str
    value: Any = ""
    value2: Any = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class SortCondition(BaseModel):
    """A sort on one column."""

    table_id: str
    column_id: str
    direction: SortDirection = SortDirection.ASC

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class ScheduleConfig(BaseModel):
    """Snapshot schedule."""

    enabled: bool = False
    frequency: ScheduleFrequency = ScheduleFrequency.WEEKLY
    time: str = "09:00"

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class ReportConfig(BaseModel):
    """
    A report declaration.

    Drafts are edited by producing new copies (see ``report_engine.authoring``);
    the engine treats a ReportConfig as immutable input.
    """

    id: str = ""
    data_source_id: str = ""
    owner_id: str = ""
    visibility: Visibility = Visibility.PRIVATE
    name: str = "New Report"
    description: str | None = None

    selected_columns: list[ReportColumn] = Field(default_factory=list)
    filters: list[FilterCondition] = Field(default_factory=list)
    sorts: list[SortCondition] = Field(default_factory=list)
    group_by: list[ReportColumn] = Field(default_factory=list)

    visualization: VisualizationType = VisualizationType.TABLE
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    created_at: str | None = None

    def table_refs(self) -> list[str]:
        """Distinct table references across columns, filters and sorts, in order."""
        refs: list[str] = []
        for item in [*self.selected_columns, *self.filters, *self.sorts]:
            if item.table_id not in refs:
                refs.append(item.table_id)
        return refs

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}
