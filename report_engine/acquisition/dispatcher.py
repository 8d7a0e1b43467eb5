"""Acquisition dispatcher - the single policy point for fetching report data.

The dispatcher is the only caller of both delegates. It decides live versus
generative routing, enforces the single-table rule for live sources, and
refuses to forward unvalidated filters.
"""

from __future__ import annotations

from report_engine.acquisition.delegates import GenerativeDataDelegate, LiveQueryDelegate
from report_engine.acquisition.request import (
    AcquisitionRequest,
    ResolvedFilter,
    ResolvedSort,
    Row,
)
from report_engine.domain.operators import operator_arity, validate_filter
from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource
from report_engine.errors import (
    AcquisitionFailedError,
    ColumnNotFoundError,
    MultiSourceViolationError,
    NoColumnsSelectedError,
    NoDataSourceError,
    ResolutionError,
)
from report_engine.log import get_logger, log_error_with_context
from report_engine.resolution.fields import FieldRef, FieldResolver, ResolvedField

logger = get_logger(__name__)

DEFAULT_ROW_LIMIT = 5_000_000
DEFAULT_ROW_COUNT_HINT = 20


class AcquisitionDispatcher:
    """
    Validate a report against its data source and fetch its rows.

    Each ``acquire`` call is independent given its inputs; the dispatcher
    holds no per-call state and can serve several open reports at once.
    """

    def __init__(
        self,
        live_delegate: LiveQueryDelegate | None = None,
        generative_delegate: GenerativeDataDelegate | None = None,
        *,
        row_limit: int = DEFAULT_ROW_LIMIT,
        row_count_hint: int = DEFAULT_ROW_COUNT_HINT,
    ) -> None:
        self.live_delegate = live_delegate
        self.generative_delegate = generative_delegate
        self.row_limit = row_limit
        self.row_count_hint = row_count_hint

    def plan(self, data_source: DataSource | None, report: ReportConfig) -> AcquisitionRequest:
        """
        Validate and resolve a live report into an acquisition request.

        Raises:
            NoDataSourceError: No data source
            NoColumnsSelectedError: Empty column selection
            MultiSourceViolationError: More than one physical table/view referenced
            ColumnNotFoundError: A reference does not resolve
            InvalidOperatorForTypeError: A filter operator is illegal for its column
            InvalidFilterValueError: A filter lacks its required value(s)
        """
        data_source = self._check_preconditions(data_source, report)
        resolver = FieldResolver(data_source)

        reconciliation = resolver.reconcile(report.table_refs())
        if not reconciliation.is_single_relation:
            raise MultiSourceViolationError(reconciliation.relation_names)

        selected = [self._resolve(resolver, column) for column in report.selected_columns]

        columns: list[str] = []
        for field in selected:
            if field.column_name not in columns:
                columns.append(field.column_name)

        filters: list[ResolvedFilter] = []
        for condition in report.filters:
            field = self._resolve(resolver, condition)
            op = validate_filter(condition, field.column_type, field.column_name)
            arity = operator_arity(op)
            filters.append(
                ResolvedFilter(
                    column=field.column_name,
                    operator=op,
                    value=condition.value if arity >= 1 else None,
                    value2=condition.value2 if arity == 2 else None,
                )
            )

        sorts = [
            ResolvedSort(column=self._resolve(resolver, sort).column_name, direction=sort.direction)
            for sort in report.sorts
        ]

        return AcquisitionRequest(
            table=selected[0].table_name,
            columns=columns,
            filters=filters,
            sorts=sorts,
            limit=self.row_limit,
        )

    def check(self, data_source: DataSource | None, report: ReportConfig) -> AcquisitionRequest | None:
        """
        Run every validation ``acquire`` would, without fetching.

        Returns:
            The live request, or None for generative sources
        """
        data_source = self._check_preconditions(data_source, report)
        if data_source.is_generative:
            self._validate_generated_filters(data_source, report)
            return None
        return self.plan(data_source, report)

    async def acquire(self, data_source: DataSource | None, report: ReportConfig) -> list[Row]:
        """
        Fetch rows for a report.

        Custom sources go to the generative delegate; every other source
        type goes to the live query delegate.

        Raises:
            ReportEngineError: Any validation failure, or AcquisitionFailedError
                when the delegate fails
        """
        data_source = self._check_preconditions(data_source, report)

        if data_source.is_generative:
            return await self._acquire_generated(data_source, report)
        return await self._acquire_live(data_source, report)

    def _check_preconditions(
        self, data_source: DataSource | None, report: ReportConfig
    ) -> DataSource:
        if data_source is None:
            raise NoDataSourceError(f"No data source for report '{report.name}'")
        if not report.selected_columns:
            raise NoColumnsSelectedError(f"Report '{report.name}' selects no columns")
        if report.data_source_id and data_source.id and report.data_source_id != data_source.id:
            logger.warning(
                f"Report '{report.name}' points at data source '{report.data_source_id}' "
                f"but is running against '{data_source.id}'"
            )
        return data_source

    @staticmethod
    def _resolve(resolver: FieldResolver, ref: FieldRef) -> ResolvedField:
        try:
            return resolver.resolve(ref)
        except ResolutionError as e:
            raise ColumnNotFoundError(ref.table_id, ref.column_id, reason=str(e)) from e

    def _validate_generated_filters(self, data_source: DataSource, report: ReportConfig) -> None:
        """Check operators of filters whose columns resolve.

        Unresolvable filters are passed through for the generator to simulate.
        """
        resolver = FieldResolver(data_source)
        for condition in report.filters:
            field = resolver.try_resolve(condition)
            if field is not None:
                validate_filter(condition, field.column_type, field.column_name)

    async def _acquire_generated(self, data_source: DataSource, report: ReportConfig) -> list[Row]:
        self._validate_generated_filters(data_source, report)

        if self.generative_delegate is None:
            raise AcquisitionFailedError("No generative data delegate configured")

        logger.info(
            f"Generating ~{self.row_count_hint} rows for report '{report.name}' "
            f"from custom source '{data_source.name or data_source.id}'"
        )
        try:
            rows = await self.generative_delegate.generate(
                data_source, report, self.row_count_hint
            )
        except AcquisitionFailedError:
            raise
        except Exception as e:
            log_error_with_context(
                logger,
                "Generative data delegate failed",
                e,
                {"data_source": data_source.id, "report": report.id},
            )
            raise AcquisitionFailedError(f"Generative data delegate failed: {e}") from e

        return self._check_rows(rows, "generative")

    async def _acquire_live(self, data_source: DataSource, report: ReportConfig) -> list[Row]:
        request = self.plan(data_source, report)

        if self.live_delegate is None:
            raise AcquisitionFailedError("No live query delegate configured")

        logger.info(
            f"Querying {len(request.columns)} columns from '{request.table}' "
            f"for report '{report.name}'"
        )
        try:
            rows = await self.live_delegate.query(
                data_source.source_descriptor(),
                request.table,
                request.columns,
                request.limit,
                request.filters,
                request.sorts,
            )
        except AcquisitionFailedError:
            raise
        except Exception as e:
            log_error_with_context(
                logger,
                "Live query delegate failed",
                e,
                {
                    "data_source": data_source.id or "<ephemeral>",
                    "table": request.table,
                    "columns": request.columns,
                    "filters": request.filter_payloads(),
                },
            )
            raise AcquisitionFailedError(f"Live query delegate failed: {e}") from e

        return self._check_rows(rows, "live")

    @staticmethod
    def _check_rows(rows: object, delegate: str) -> list[Row]:
        if not isinstance(rows, list):
            raise AcquisitionFailedError(
                f"The {delegate} delegate returned {type(rows).__name__}, expected a list of rows"
            )
        logger.debug(f"The {delegate} delegate returned {len(rows)} rows")
        return rows
