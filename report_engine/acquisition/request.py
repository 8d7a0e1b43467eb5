"""Acquisition request - the resolved, validated data request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from report_engine.domain.operators import FilterOperator
from report_engine.domain.report import Row, SortDirection

__all__ = ["AcquisitionRequest", "ResolvedFilter", "ResolvedSort", "Row"]


class ResolvedFilter(BaseModel):
    """A filter on a physical column with a validated operator."""

    column: str
    operator: FilterOperator
    value: Any = None
    value2: Any = None

    model_config = {"frozen": True}


class ResolvedSort(BaseModel):
    """A sort on a physical column."""

    column: str
    direction: SortDirection = SortDirection.ASC

    model_config = {"frozen": True}


class AcquisitionRequest(BaseModel):
    """
    Everything the live query delegate needs for one table.

    Names are physical names, never aliases.
    """

    table: str
    columns: list[str]
    filters: list[ResolvedFilter] = Field(default_factory=list)
    sorts: list[ResolvedSort] = Field(default_factory=list)
    limit: int

    def filter_payloads(self) -> list[dict[str, Any]]:
        """Filters as plain dicts, omitting unused values."""
        return [f.model_dump(mode="json", exclude_none=True) for f in self.filters]

    def sort_payloads(self) -> list[dict[str, Any]]:
        """Sorts as plain dicts."""
        return [s.model_dump(mode="json") for s in self.sorts]

    model_config = {"frozen": True}
