"""Delegate protocols - the engine's outbound system boundary."""

from __future__ import annotations

from typing import Any, Protocol

from report_engine.acquisition.request import ResolvedFilter, ResolvedSort, Row
from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource


class LiveQueryDelegate(Protocol):
    """Executes a single-table request against a live data source.

    Transport and execution belong to the delegate; the engine only shapes
    the request.
    """

    async def query(
        self,
        source: str | dict[str, Any],
        table: str,
        columns: list[str],
        limit: int,
        filters: list[ResolvedFilter],
        sorts: list[ResolvedSort],
    ) -> list[Row]:
        """Run the request.

        Args:
            source: Persisted source id, or the full payload of an ephemeral source
            table: Physical table/view name
            columns: Physical column names
            limit: Maximum rows
            filters: Validated filters on physical columns
            sorts: Sorts on physical columns

        Returns:
            Rows keyed by physical column name
        """
        ...


class GenerativeDataDelegate(Protocol):
    """Produces schema-aware mock rows for sources without a live backend.

    A missing credential is not an error: the delegate logs it and returns
    an empty list.
    """

    async def generate(
        self,
        data_source: DataSource,
        report: ReportConfig,
        row_count_hint: int,
    ) -> list[Row]:
        """Generate rows for the report.

        Args:
            data_source: The custom data source
            report: The report being run
            row_count_hint: Roughly how many rows to produce

        Returns:
            Plain row mappings (possibly empty)
        """
        ...
