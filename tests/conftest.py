"""Shared fixtures: a small warehouse schema and reports against it."""

from __future__ import annotations

import pytest

from report_engine.domain.report import FilterCondition, ReportColumn, ReportConfig
from report_engine.domain.schema import ColumnDef, DataSource, TableDef, ViewDef


@pytest.fixture
def orders_table() -> TableDef:
    """Exposed orders table with one column of each type."""
    return TableDef(
        id="t_orders",
        name="orders",
        alias="Orders",
        exposed=True,
        columns=[
            ColumnDef(id="c_id", name="id", type="number", alias="Order ID"),
            ColumnDef(id="c_total", name="total", type="currency", alias="Order Total"),
            ColumnDef(id="c_created", name="created_at", type="date", alias="Created"),
            ColumnDef(id="c_status", name="status", type="string"),
            ColumnDef(id="c_paid", name="is_paid", type="boolean", alias="Paid"),
            ColumnDef(id="c_meta", name="metadata", type="json"),
        ],
    )


@pytest.fixture
def customers_table() -> TableDef:
    """Second exposed table."""
    return TableDef(
        id="t_customers",
        name="customers",
        exposed=True,
        columns=[
            ColumnDef(id="k_id", name="id", type="number"),
            ColumnDef(id="k_name", name="name", type="string", alias="Customer"),
        ],
    )


@pytest.fixture
def audit_table() -> TableDef:
    """Table hidden from reporting."""
    return TableDef(
        id="t_audit",
        name="audit_log",
        exposed=False,
        columns=[ColumnDef(id="a_event", name="event", type="string")],
    )


@pytest.fixture
def revenue_view() -> ViewDef:
    """Exposed view."""
    return ViewDef(
        id="v_revenue",
        name="monthly_revenue",
        alias="Monthly Revenue",
        exposed=True,
        definition="SELECT date_trunc('month', created_at) AS month, sum(total) AS revenue FROM orders",
        columns=[
            ColumnDef(id="r_month", name="month", type="date"),
            ColumnDef(id="r_revenue", name="revenue", type="currency", alias="Revenue"),
        ],
    )


@pytest.fixture
def warehouse(
    orders_table: TableDef,
    customers_table: TableDef,
    audit_table: TableDef,
    revenue_view: ViewDef,
) -> DataSource:
    """Persisted postgres source."""
    return DataSource(
        id="ds_warehouse",
        name="Warehouse",
        type="postgres",
        tables=[orders_table, customers_table, audit_table],
        views=[revenue_view],
    )


@pytest.fixture
def custom_source(orders_table: TableDef) -> DataSource:
    """Generative source with the same orders schema."""
    return DataSource(id="ds_custom", name="Mock Shop", type="custom", tables=[orders_table])


@pytest.fixture
def orders_report() -> ReportConfig:
    """Selects id and total from orders, filtered to totals over 100."""
    return ReportConfig(
        id="r_orders",
        data_source_id="ds_warehouse",
        name="Big Orders",
        selected_columns=[
            ReportColumn(table_id="t_orders", column_id="c_id"),
            ReportColumn(table_id="t_orders", column_id="c_total"),
        ],
        filters=[
            FilterCondition(
                id="f1", table_id="t_orders", column_id="c_total", operator="gt", value=100
            )
        ],
    )
