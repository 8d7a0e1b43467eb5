"""Error taxonomy for report resolution and acquisition.

Every error carries an ``ErrorKind`` and a ``user_message`` suitable for the
presentation layer. The exception message itself is meant for logs.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Kinds of failures surfaced to the report viewer."""

    NO_DATA_SOURCE = "NoDataSource"
    NO_COLUMNS_SELECTED = "NoColumnsSelected"
    MULTI_SOURCE_VIOLATION = "MultiSourceViolation"
    COLUMN_NOT_FOUND = "ColumnNotFound"
    INVALID_OPERATOR_FOR_TYPE = "InvalidOperatorForType"
    INVALID_FILTER_VALUE = "InvalidFilterValue"
    ACQUISITION_FAILED = "AcquisitionFailed"

    # Field resolution
    TABLE_NOT_FOUND = "TableNotFound"
    NOT_EXPOSED = "NotExposed"
    UNKNOWN_COLUMN = "UnknownColumn"


class ReportEngineError(Exception):
    """Base class for all recoverable report errors."""

    kind: ClassVar[ErrorKind]
    default_user_message: ClassVar[str] = "The report could not be run."

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or self.default_user_message


class NoDataSourceError(ReportEngineError):
    """The report has no data source to run against."""

    kind = ErrorKind.NO_DATA_SOURCE
    default_user_message = "This report's data source is not available."


class NoColumnsSelectedError(ReportEngineError):
    """The report selects no columns."""

    kind = ErrorKind.NO_COLUMNS_SELECTED
    default_user_message = "Select at least one column to run this report."


class MultiSourceViolationError(ReportEngineError):
    """A live report references more than one table or view."""

    kind = ErrorKind.MULTI_SOURCE_VIOLATION

    def __init__(self, relations: list[str]) -> None:
        self.relations = relations
        names = ", ".join(relations)
        super().__init__(
            f"Report references multiple tables/views: {names}",
            user_message=(
                f"Reports can only use one table or view at a time (found: {names})."
            ),
        )


class ColumnNotFoundError(ReportEngineError):
    """A column reference in the report could not be resolved."""

    kind = ErrorKind.COLUMN_NOT_FOUND

    def __init__(self, table_ref: str, column_ref: str, reason: str | None = None) -> None:
        self.table_ref = table_ref
        self.column_ref = column_ref
        message = f"Column '{table_ref}.{column_ref}' not found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            user_message=f"Column '{column_ref}' is no longer available in this data source.",
        )


class InvalidOperatorForTypeError(ReportEngineError):
    """A filter uses an operator that is not legal for its column type."""

    kind = ErrorKind.INVALID_OPERATOR_FOR_TYPE

    def __init__(self, operator: str, column_type: str, column: str | None = None) -> None:
        self.operator = operator
        self.column_type = column_type
        self.column = column
        target = f"column '{column}' ({column_type})" if column else f"type '{column_type}'"
        super().__init__(
            f"Operator '{operator}' is not valid for {target}",
            user_message=f"The filter operator '{operator}' cannot be used on {target}.",
        )


class InvalidFilterValueError(ReportEngineError):
    """A filter is missing the value(s) its operator requires."""

    kind = ErrorKind.INVALID_FILTER_VALUE

    def __init__(self, operator: str, column: str, expected: int) -> None:
        self.operator = operator
        self.column = column
        self.expected = expected
        noun = "a value" if expected == 1 else f"{expected} values"
        super().__init__(
            f"Operator '{operator}' on '{column}' requires {noun}",
            user_message=f"The filter on '{column}' needs {noun}.",
        )


class AcquisitionFailedError(ReportEngineError):
    """The acquisition delegate failed. The cause is kept for diagnostics."""

    kind = ErrorKind.ACQUISITION_FAILED
    default_user_message = "Could not load report data. Please try refreshing."


class ResolutionError(ReportEngineError):
    """Base class for field resolution failures."""

    def __init__(self, table_ref: str, column_ref: str | None, message: str) -> None:
        self.table_ref = table_ref
        self.column_ref = column_ref
        super().__init__(message)


class TableNotFoundError(ResolutionError):
    """No table or view matches the reference."""

    kind = ErrorKind.TABLE_NOT_FOUND

    def __init__(self, table_ref: str, column_ref: str | None = None) -> None:
        super().__init__(table_ref, column_ref, f"Table or view '{table_ref}' not found")


class NotExposedError(ResolutionError):
    """The table or view exists but is not exposed for reporting."""

    kind = ErrorKind.NOT_EXPOSED

    def __init__(self, table_ref: str, column_ref: str | None = None) -> None:
        super().__init__(
            table_ref, column_ref, f"Table or view '{table_ref}' is not exposed for reporting"
        )


class UnknownColumnError(ResolutionError):
    """The relation exists but has no matching column."""

    kind = ErrorKind.UNKNOWN_COLUMN

    def __init__(self, table_ref: str, column_ref: str) -> None:
        super().__init__(
            table_ref, column_ref, f"Column '{column_ref}' not found in '{table_ref}'"
        )
