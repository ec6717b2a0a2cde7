"""
Google Custom Search provider.

Calls the Custom Search JSON API with httpx and normalizes items into
WebSearchResult objects. Snippets have HTML entities decoded and list
markers moved onto their own lines.

Dependencies: httpx
System role: Web search adapter
"""

import html
import logging
import re
from typing import Any

import httpx

from agent_rag.boundary.web_search.base import WebSearchProvider
from agent_rag.configs.web_search import WebSearchSettings
from agent_rag.core.exceptions import ConfigError, EmptyQueryError, ServiceError
from agent_rag.models.web_search import (
    SearchEngine,
    WebSearchPreferences,
    WebSearchResponse,
    WebSearchResult,
)

logger = logging.getLogger(__name__)

_LIST_MARKER = re.compile(r"(?:(?<=\s)|^)(?:(?P<number>\d{1,2})\.|(?P<bullet>[•·*-]))(?=\s)")
_ALWAYS_BULLETS = "•·"
_LIST_OPENERS = ":.!?\n"
_INLINE_SPACE = re.compile(r"[ \t\r\f\v]+")


def _opens_list(text: str, position: int) -> bool:
    before = text[:position].rstrip(" \t")
    return not before or before[-1] in _LIST_OPENERS


def _break_list_items(text: str) -> str:
    """
    Put each list item on its own line.

    A number or dash counts as a list marker only where a list can open
    (text start, after a colon, a sentence end or a newline) or where it
    continues the list already started, so years and dashes in prose stay put.
    """
    breaks = []
    next_number = None
    open_bullet = None
    for match in _LIST_MARKER.finditer(text):
        opens = _opens_list(text, match.start())
        number, bullet = match.group("number"), match.group("bullet")
        if number is not None:
            if opens or int(number) == next_number:
                breaks.append(match.start())
                next_number = int(number) + 1
        elif bullet in _ALWAYS_BULLETS or opens or bullet == open_bullet:
            breaks.append(match.start())
            open_bullet = bullet
    pieces = []
    last = 0
    for position in breaks:
        pieces.append(text[last:position])
        last = position
    pieces.append(text[last:])
    return "\n".join(pieces)


def format_snippet(snippet: str) -> str:
    """
    Clean a search snippet for display.

    Decodes HTML entities, starts numbered and bulleted items on a new line
    and collapses runs of spaces.
    """
    formatted = _break_list_items(html.unescape(snippet))
    lines = (_INLINE_SPACE.sub(" ", line).strip() for line in formatted.split("\n"))
    return "\n".join(line for line in lines if line)


class GoogleCustomSearchProvider(WebSearchProvider):
    """Google Custom Search JSON API client."""

    def __init__(
        self,
        api_key: str,
        engine_id: str,
        endpoint: str = "https://www.googleapis.com/customsearch/v1",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            api_key: Custom Search API key
            engine_id: Programmable search engine ID (cx)
            endpoint: API endpoint
            timeout_seconds: Request timeout
            client: Optional shared httpx client (tests pass one with a mock transport)
        """
        self._api_key = api_key
        self._engine_id = engine_id
        self._endpoint = endpoint
        self._timeout = httpx.Timeout(timeout_seconds)
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: WebSearchSettings,
        client: httpx.AsyncClient | None = None,
    ) -> "GoogleCustomSearchProvider":
        return cls(
            api_key=settings.api_key,
            engine_id=settings.engine_id,
            endpoint=settings.endpoint,
            timeout_seconds=settings.timeout_seconds,
            client=client,
        )

    def _build_params(self, query: str, preferences: WebSearchPreferences) -> dict[str, Any]:
        params: dict[str, Any] = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": query,
            "num": preferences.max_results,
            "safe": "active" if preferences.safe_mode_enabled else "off",
        }
        if preferences.include_images:
            params["searchType"] = "image"
        return params

    async def _get(self, params: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self._endpoint, params=params, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(self._endpoint, params=params)

    async def search(
        self,
        query: str,
        preferences: WebSearchPreferences | None = None,
    ) -> WebSearchResponse:
        if not query or not query.strip():
            raise EmptyQueryError(details={"provider": "web_search"})
        preferences = preferences or WebSearchPreferences()
        if preferences.search_engine != SearchEngine.GOOGLE:
            raise ConfigError(
                f"Unsupported search engine: {preferences.search_engine.value}",
                field="search_engine",
            )
        if not self._api_key or not self._engine_id:
            raise ServiceError(
                "Search service not configured",
                provider="web_search",
                operation="search",
            )

        logger.info(f"{__name__}:search - START query_len={len(query)}, max_results={preferences.max_results}")
        try:
            response = await self._get(self._build_params(query, preferences))
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{__name__}:search - FAILED: {type(e).__name__}: {e}")
            raise ServiceError(
                f"Search request failed: {e}",
                provider="web_search",
                operation="search",
            ) from e

        if response.status_code >= 400:
            message = (data.get("error") or {}).get("message") if isinstance(data, dict) else None
            logger.error(f"{__name__}:search - FAILED status={response.status_code}: {message}")
            raise ServiceError(
                message or "Search request failed",
                provider="web_search",
                operation="search",
                details={"status_code": response.status_code},
            )

        result = self._parse(data)
        logger.info(f"{__name__}:search - END results={len(result.results)}")
        return result

    @staticmethod
    def _parse(data: dict[str, Any]) -> WebSearchResponse:
        results = [
            WebSearchResult(
                title=item.get("title", ""),
                url=item.get("link", ""),
                snippet=format_snippet(item.get("snippet", "")),
                position=position,
            )
            for position, item in enumerate(data.get("items") or [], start=1)
        ]
        info = data.get("searchInformation") or {}
        return WebSearchResponse(
            results=results,
            total_results=int(info.get("totalResults") or 0),
            search_time=float(info.get("searchTime") or 0.0),
        )
