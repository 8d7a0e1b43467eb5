"""HTTP live query delegate - runs acquisition requests against the backend API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from report_engine.acquisition.request import ResolvedFilter, ResolvedSort, Row
from report_engine.log import get_logger

if TYPE_CHECKING:
    from report_engine.config import ApiConfig

logger = get_logger(__name__)

QUERY_PATH = "/datasources/query"


class QueryTransportError(Exception):
    """Error from the backend query API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_url(base_url: str, path: str) -> str:
    """
    Join the API base URL and an endpoint path.

    Without a base URL the path is returned relative. A base that already
    ends in ``/api`` is not given a second ``/api`` segment.

    Examples:
        build_url("", "/datasources/query") -> "/datasources/query"
        build_url("http://host/api/", "/datasources/query") -> "http://host/api/datasources/query"
        build_url("http://host", "/datasources/query") -> "http://host/api/datasources/query"
    """
    if not base_url:
        return f"/{path.lstrip('/')}"
    base = base_url.rstrip("/")
    if base.endswith("/api"):
        trimmed = path.lstrip("/")
        if trimmed.startswith("api/"):
            trimmed = trimmed[len("api/"):]
        return f"{base}/{trimmed}"
    return f"{base}/api/{path.lstrip('/')}"


def _is_absolute(url: str) -> bool:
    return url.startswith(("http://", "https://"))


class HttpQueryDelegate:
    """
    Live query delegate backed by the report API.

    Persisted sources are sent by id (``dataSourceId``); ephemeral sources
    are sent whole (``dataSource``) so the backend can connect without a
    stored record.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        verify: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. ``http://localhost:8000`` or ``https://host/api``
            timeout: Request timeout in seconds
            verify: Verify TLS certificates
            client: Pre-built client (tests, connection reuse). Not closed by the delegate.
        """
        self.base_url = base_url
        self.timeout = timeout
        self.verify = verify
        self._client = client

    @classmethod
    def from_config(cls, config: ApiConfig) -> HttpQueryDelegate:
        return cls(config.base_url, timeout=config.timeout, verify=config.verify_ssl)

    @property
    def url(self) -> str:
        return build_url(self.base_url, QUERY_PATH)

    def build_body(
        self,
        source: str | dict[str, Any],
        table: str,
        columns: list[str],
        limit: int,
        filters: list[ResolvedFilter],
        sorts: list[ResolvedSort],
    ) -> dict[str, Any]:
        """Request body for the query endpoint."""
        body: dict[str, Any] = {
            "table": table,
            "columns": columns,
            "limit": limit,
            "filters": [f.model_dump(mode="json", exclude_none=True) for f in filters],
            "sorts": [s.model_dump(mode="json") for s in sorts],
        }
        if isinstance(source, str):
            body["dataSourceId"] = source
        else:
            body["dataSource"] = source
        return body

    async def query(
        self,
        source: str | dict[str, Any],
        table: str,
        columns: list[str],
        limit: int,
        filters: list[ResolvedFilter],
        sorts: list[ResolvedSort],
    ) -> list[Row]:
        """
        POST the request and return the decoded rows.

        Raises:
            QueryTransportError: No reachable URL, network failure, non-2xx
                status, or a body that is not JSON
        """
        url = self.url
        body = self.build_body(source, table, columns, limit, filters, sorts)
        logger.debug(f"POST {url} table={table} columns={columns} limit={limit}")

        if self._client is not None:
            response = await self._send(self._client, url, body)
        else:
            if not _is_absolute(url):
                raise QueryTransportError(
                    f"No API base URL configured, cannot call {url}. "
                    "Set api.base_url in rpe.yml or RPE_API_URL."
                )
            async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify) as client:
                response = await self._send(client, url, body)

        if response.is_error:
            text = response.text
            raise QueryTransportError(
                f"Request failed ({response.status_code}): {text or 'Failed to fetch data'}",
                status_code=response.status_code,
            )

        try:
            rows: list[Row] = response.json()
        except ValueError as e:
            raise QueryTransportError(
                f"Invalid JSON response ({response.status_code}): {response.text or 'no body'}",
                status_code=response.status_code,
            ) from e
        return rows

    @staticmethod
    async def _send(client: httpx.AsyncClient, url: str, body: dict[str, Any]) -> httpx.Response:
        try:
            return await client.post(url, json=body)
        except httpx.TimeoutException as e:
            raise QueryTransportError(f"Timeout calling {url}") from e
        except httpx.HTTPError as e:
            raise QueryTransportError(f"Network error calling {url}: {e}") from e
