"""Domain layer - schema, report and formatting types.

This layer is transport-agnostic: it describes what a data source and a
report ARE. Resolution, acquisition and presentation live in sibling packages.
"""

from report_engine.domain.formatting import (
    BooleanFormatting,
    BooleanStyle,
    CurrencyFormatting,
    DateFormatting,
    FormattingConfig,
    NumberFormatting,
    StringFormatting,
    SymbolPosition,
    TextCase,
    default_formatting,
)
from report_engine.domain.operators import (
    FilterOperator,
    OperatorSpec,
    is_operator_allowed,
    operator_arity,
    operators_for,
    validate_filter,
)
from report_engine.domain.report import (
    Aggregation,
    FilterCondition,
    ReportColumn,
    ReportConfig,
    ScheduleConfig,
    ScheduleFrequency,
    SortCondition,
    SortDirection,
    Visibility,
    VisualizationType,
)
from report_engine.domain.schema import (
    ColumnDef,
    ColumnType,
    ConnectionDetails,
    Constraint,
    DataSource,
    DataSourceType,
    ForeignKey,
    Index,
    Relation,
    TableDef,
    ViewDef,
)

__all__ = [
    # Schema
    "ColumnDef",
    "ColumnType",
    "ConnectionDetails",
    "Constraint",
    "DataSource",
    "DataSourceType",
    "ForeignKey",
    "Index",
    "Relation",
    "TableDef",
    "ViewDef",
    # Report
    "Aggregation",
    "FilterCondition",
    "ReportColumn",
    "ReportConfig",
    "ScheduleConfig",
    "ScheduleFrequency",
    "SortCondition",
    "SortDirection",
    "Visibility",
    "VisualizationType",
    # Formatting
    "BooleanFormatting",
    "BooleanStyle",
    "CurrencyFormatting",
    "DateFormatting",
    "FormattingConfig",
    "NumberFormatting",
    "StringFormatting",
    "SymbolPosition",
    "TextCase",
    "default_formatting",
    # Operators
    "FilterOperator",
    "OperatorSpec",
    "is_operator_allowed",
    "operator_arity",
    "operators_for",
    "validate_filter",
]
