"""Report session - one open report view and its latest result."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from report_engine.acquisition.dispatcher import AcquisitionDispatcher
from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource
from report_engine.errors import ReportEngineError
from report_engine.log import get_logger
from report_engine.presentation.table import PresentedReport, present

logger = get_logger(__name__)


@dataclass
class ReportResult:
    """
    Outcome of one refresh.

    On failure ``presented`` is empty and ``message`` carries the
    user-facing text of the error.
    """

    seq: int
    presented: PresentedReport = field(default_factory=PresentedReport)
    error: ReportEngineError | None = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return self.error.user_message if self.error is not None else None

    @property
    def rows(self) -> list[dict[str, str]]:
        return self.presented.rows


class ReportSession:
    """
    Holds the display state of one open report.

    Refreshes are numbered as they start. Only the most recently started
    refresh may replace ``result``; an older one that completes later is
    returned to its caller and otherwise dropped.
    """

    def __init__(
        self,
        dispatcher: AcquisitionDispatcher,
        data_source: DataSource | None,
        report: ReportConfig,
    ) -> None:
        self.dispatcher = dispatcher
        self.data_source = data_source
        self.report = report
        self.result: ReportResult | None = None
        self._seq = 0

    @property
    def latest_seq(self) -> int:
        return self._seq

    @property
    def loading(self) -> bool:
        return self.result is None or self.result.seq < self._seq

    def update(self, report: ReportConfig, data_source: DataSource | None = None) -> None:
        """Swap in an edited report (and optionally its data source)."""
        self.report = report
        if data_source is not None:
            self.data_source = data_source

    async def refresh(self) -> ReportResult:
        """Acquire and present the report, never raising report errors."""
        self._seq += 1
        seq = self._seq
        report = self.report
        data_source = self.data_source

        try:
            rows = await self.dispatcher.acquire(data_source, report)
            result = ReportResult(seq=seq, presented=present(rows, report, data_source))
        except ReportEngineError as e:
            logger.info(f"Report '{report.name}' failed ({e.kind.value}): {e}")
            result = ReportResult(
                seq=seq,
                presented=PresentedReport(visualization=report.visualization),
                error=e,
            )

        if seq != self._seq:
            logger.debug(
                f"Discarding stale result #{seq} for report '{report.name}' "
                f"(latest is #{self._seq})"
            )
            return result

        self.result = result
        return result
