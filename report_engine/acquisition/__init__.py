"""Acquisition layer - validated routing of report requests to data delegates."""

from report_engine.acquisition.request import (
    AcquisitionRequest,
    ResolvedFilter,
    ResolvedSort,
    Row,
)
from report_engine.acquisition.delegates import GenerativeDataDelegate, LiveQueryDelegate
from report_engine.acquisition.dispatcher import (
    DEFAULT_ROW_COUNT_HINT,
    DEFAULT_ROW_LIMIT,
    AcquisitionDispatcher,
)
from report_engine.acquisition.generative import GeminiDataGenerator, build_generation_prompt
from report_engine.acquisition.http_query import HttpQueryDelegate, QueryTransportError, build_url
from report_engine.acquisition.session import ReportResult, ReportSession

__all__ = [
    "DEFAULT_ROW_COUNT_HINT",
    "DEFAULT_ROW_LIMIT",
    "AcquisitionDispatcher",
    "AcquisitionRequest",
    "GeminiDataGenerator",
    "GenerativeDataDelegate",
    "HttpQueryDelegate",
    "LiveQueryDelegate",
    "QueryTransportError",
    "ReportResult",
    "ReportSession",
    "ResolvedFilter",
    "ResolvedSort",
    "Row",
    "build_generation_prompt",
    "build_url",
]
