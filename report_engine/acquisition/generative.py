"""Generative data delegate - schema-aware mock rows from Gemini.

Custom data sources have no live backend. Their rows are produced by an LLM
from a prompt describing the exposed schema and the report's requirements.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

import httpx

from report_engine.acquisition.request import Row
from report_engine.credentials import GEMINI_API_KEY, CredentialStore, get_credential_store
from report_engine.domain.report import ReportConfig
from report_engine.domain.schema import DataSource
from report_engine.log import get_logger
from report_engine.resolution.fields import FieldResolver

if TYPE_CHECKING:
    from report_engine.config import GenerativeConfig

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"

API_KEY_HEADER = "x-goog-api-key"


def describe_schema(data_source: DataSource) -> str:
    """Exposed tables and views with their column names and types."""
    blocks = []
    for relation in data_source.exposed_relations():
        columns = ", ".join(f"{c.name} ({_type_name(c.type)})" for c in relation.columns)
        kind = "View" if relation.is_view else "Table"
        blocks.append(f"{kind}: {relation.name}\nColumns: {columns}")
    return "\n\n".join(blocks)


def _type_name(column_type: Any) -> str:
    return getattr(column_type, "value", column_type)


def requested_columns(data_source: DataSource, report: ReportConfig) -> list[str]:
    """``table.column`` names for the selected columns.

    Unresolvable selections are described by their raw references.
    """
    resolver = FieldResolver(data_source)
    names = []
    for column in report.selected_columns:
        field = resolver.try_resolve(column)
        if field is not None:
            names.append(f"{field.table_name}.{field.column_name}")
        else:
            names.append(f"{column.table_id}.{column.column_id}")
    return names


def build_generation_prompt(
    data_source: DataSource,
    report: ReportConfig,
    row_count: int,
) -> str:
    """Prompt asking for ``row_count`` rows matching the report."""
    filters = json.dumps([f.model_dump(mode="json", by_alias=True) for f in report.filters])
    sorts = json.dumps([s.model_dump(mode="json", by_alias=True) for s in report.sorts])

    return (
        f"Generate {row_count} rows of realistic mock data for a report.\n"
        "\n"
        "Data Source Schema:\n"
        f"{describe_schema(data_source)}\n"
        "\n"
        "Report Requirements:\n"
        f"- Columns needed: {', '.join(requested_columns(data_source, report))}\n"
        f"- Filters to apply (simulated): {filters}\n"
        f"- Sorting: {sorts}\n"
        "\n"
        "Return ONLY a JSON array of objects. Keys should match the requested columns.\n"
        "Make the data consistent and realistic.\n"
    )


def extract_text(payload: dict[str, Any]) -> str | None:
    """Text of the first candidate part, or None when the response has none."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [p["text"] for p in parts if isinstance(p, dict) and p.get("text")]
    return "".join(texts) or None


class GeminiDataGenerator:
    """
    Generative data delegate calling the Gemini ``generateContent`` REST API.

    The API key comes from the credential store (``GEMINI_API_KEY`` or the
    keychain). Without one, generation logs an error and yields no rows.
    """

    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        temperature: float = 0.2,
        timeout: float = 60.0,
        api_key: str | None = None,
        credentials: CredentialStore | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.model = model
        self.endpoint = endpoint.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout
        self._api_key = api_key
        self._credentials = credentials
        self._client = client

    @classmethod
    def from_config(cls, config: GenerativeConfig) -> GeminiDataGenerator:
        return cls(
            model=config.model,
            endpoint=config.endpoint,
            temperature=config.temperature,
            timeout=config.timeout,
        )

    @property
    def url(self) -> str:
        return f"{self.endpoint}/models/{self.model}:generateContent"

    def api_key(self) -> str | None:
        if self._api_key:
            return self._api_key
        store = self._credentials or get_credential_store()
        return store.get(GEMINI_API_KEY)

    def build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": self.temperature,
            },
        }

    async def generate(
        self,
        data_source: DataSource,
        report: ReportConfig,
        row_count_hint: int,
    ) -> list[Row]:
        """
        Generate mock rows for a report.

        Returns:
            Generated rows; empty when no API key is configured or the model
            returned no text

        Raises:
            httpx.HTTPError: Transport failure or non-2xx response
            ValueError: The model returned JSON that is not an array
        """
        # Keychain backends block
        api_key = await asyncio.to_thread(self.api_key)
        if not api_key:
            logger.error(
                "Gemini API key not found. Set GEMINI_API_KEY or store "
                "'gemini-api-key' in the system keychain."
            )
            return []

        prompt = build_generation_prompt(data_source, report, row_count_hint)
        body = self.build_body(prompt)
        headers = {API_KEY_HEADER: api_key}

        if self._client is not None:
            response = await self._client.post(self.url, json=body, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=body, headers=headers)
        response.raise_for_status()

        text = extract_text(response.json())
        if not text:
            logger.warning(f"Gemini returned no text for report '{report.name}'")
            return []

        rows = json.loads(text)
        if not isinstance(rows, list):
            raise ValueError(f"Expected a JSON array of rows, got {type(rows).__name__}")
        return [row for row in rows if isinstance(row, dict)]
