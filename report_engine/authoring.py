"""Report authoring helpers.

Pure functions that take a ReportConfig and return an edited copy. They
back a report builder: choosing a data source, ticking columns, adding
filters and sorts.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from report_engine.domain.formatting import default_formatting
from report_engine.domain.operators import operators_for
from report_engine.domain.report import (
    FilterCondition,
    ReportColumn,
    ReportConfig,
    SortCondition,
    SortDirection,
)
from report_engine.domain.schema import ColumnDef, DataSource, Relation, TableDef


def _new_id() -> str:
    return str(uuid.uuid4())


def new_report(data_source_id: str = "", *, owner_id: str = "", name: str = "New Report") -> ReportConfig:
    """Start an empty private report."""
    return ReportConfig(
        id=_new_id(),
        data_source_id=data_source_id,
        owner_id=owner_id,
        name=name,
        created_at=datetime.now(timezone.utc).isoformat(),
    )


def change_data_source(report: ReportConfig, data_source_id: str) -> ReportConfig:
    """Point the report at another source, clearing selections, filters and sorts."""
    if data_source_id == report.data_source_id:
        return report
    return report.model_copy(
        update={
            "data_source_id": data_source_id,
            "selected_columns": [],
            "filters": [],
            "sorts": [],
            "group_by": [],
        }
    )


def _matches(column: ReportColumn, table: Relation, field: ColumnDef) -> bool:
    return column.table_id in (table.id, table.name) and column.column_id in (field.id, field.name)


def is_selected(report: ReportConfig, table: Relation, column: ColumnDef) -> bool:
    return any(_matches(c, table, column) for c in report.selected_columns)


def toggle_column(report: ReportConfig, table: Relation, column: ColumnDef) -> ReportConfig:
    """
    Select or deselect a column.

    A newly selected column gets the default formatting for its type.
    """
    remaining = [c for c in report.selected_columns if not _matches(c, table, column)]
    if len(remaining) != len(report.selected_columns):
        return report.model_copy(update={"selected_columns": remaining})

    selected = ReportColumn(
        table_id=table.id,
        column_id=column.id,
        formatting=default_formatting(column.type),
    )
    return report.model_copy(update={"selected_columns": [*report.selected_columns, selected]})


def set_column_alias(report: ReportConfig, index: int, alias: str | None) -> ReportConfig:
    """Set (or clear, with an empty alias) the display alias of a selected column."""
    columns = list(report.selected_columns)
    columns[index] = columns[index].model_copy(update={"alias": alias or None})
    return report.model_copy(update={"selected_columns": columns})


def add_filter(report: ReportConfig, data_source: DataSource) -> ReportConfig:
    """
    Append a blank filter on the first exposed relation's first column.

    The operator is the first one legal for that column's type. Returns the
    report unchanged when no exposed relation has columns.
    """
    relation = next((r for r in data_source.exposed_relations() if r.columns), None)
    if relation is None:
        return report

    column = relation.columns[0]
    condition = FilterCondition(
        id=_new_id(),
        table_id=relation.id,
        column_id=column.id,
        operator=operators_for(column.type)[0].operator.value,
        value="",
    )
    return report.model_copy(update={"filters": [*report.filters, condition]})


def _filter_index(report: ReportConfig, filter_ref: int | str) -> int:
    if isinstance(filter_ref, int):
        if not -len(report.filters) <= filter_ref < len(report.filters):
            raise IndexError(f"No filter at index {filter_ref}")
        return filter_ref
    for i, condition in enumerate(report.filters):
        if condition.id == filter_ref:
            return i
    raise KeyError(f"No filter with id '{filter_ref}'")


def update_filter(report: ReportConfig, filter_ref: int | str, **changes: Any) -> ReportConfig:
    """
    Change fields of one filter, addressed by position or id.

    Changes are validated, so unknown fields or bad values raise
    ``pydantic.ValidationError``.
    """
    index = _filter_index(report, filter_ref)
    filters = list(report.filters)
    data = filters[index].model_dump()
    data.update(changes)
    filters[index] = FilterCondition.model_validate(data)
    return report.model_copy(update={"filters": filters})


def remove_filter(report: ReportConfig, filter_ref: int | str) -> ReportConfig:
    """Drop one filter, addressed by position or id."""
    index = _filter_index(report, filter_ref)
    filters = list(report.filters)
    del filters[index]
    return report.model_copy(update={"filters": filters})


def add_sort(
    report: ReportConfig,
    table_id: str,
    column_id: str,
    direction: SortDirection = SortDirection.ASC,
) -> ReportConfig:
    """Sort by a column. Re-sorting an already sorted column changes its direction."""
    sort = SortCondition(table_id=table_id, column_id=column_id, direction=direction)
    sorts = list(report.sorts)
    for i, existing in enumerate(sorts):
        if existing.table_id == table_id and existing.column_id == column_id:
            sorts[i] = sort
            break
    else:
        sorts.append(sort)
    return report.model_copy(update={"sorts": sorts})


def remove_sort(report: ReportConfig, index: int) -> ReportConfig:
    """Drop the sort at a position."""
    sorts = list(report.sorts)
    del sorts[index]
    return report.model_copy(update={"sorts": sorts})


def _get(raw: dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    value = raw.get(snake, raw.get(camel))
    return default if value is None else value


def hydrate_discovered_tables(raw_tables: list[dict[str, Any]]) -> list[TableDef]:
    """
    Turn tables returned by schema discovery into exposed TableDefs.

    Each table and column gets a fresh id. Missing aliases default to the
    physical name.
    """
    tables = []
    for raw in raw_tables:
        columns = [
            ColumnDef(
                id=_new_id(),
                name=c["name"],
                type=c.get("type", "string"),
                alias=c.get("alias") or c["name"],
                description=c.get("description") or "",
                sample_value=str(_get(c, "sample_value", "sampleValue", "")),
            )
            for c in raw.get("columns") or []
        ]
        tables.append(
            TableDef(
                id=_new_id(),
                name=raw["name"],
                alias=raw.get("alias") or raw["name"],
                description=raw.get("description") or "",
                columns=columns,
                exposed=True,
            )
        )
    return tables
