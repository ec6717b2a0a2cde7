"""
Cache-through web search provider.

Serves repeated searches from a ResultCache keyed by query and
preferences. A failing cache never fails the search: the error is logged
and the call falls through to the wrapped provider.

Dependencies: agent_rag.core.cache
System role: Web search result caching
"""

import logging

from agent_rag.boundary.web_search.base import WebSearchProvider
from agent_rag.core.cache.result_cache import ResultCache
from agent_rag.models.web_search import WebSearchPreferences, WebSearchResponse

logger = logging.getLogger(__name__)


class CachedWebSearchProvider(WebSearchProvider):
    """WebSearchProvider decorator backed by a ResultCache."""

    def __init__(self, provider: WebSearchProvider, cache: ResultCache) -> None:
        self._provider = provider
        self._cache = cache

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def search(
        self,
        query: str,
        preferences: WebSearchPreferences | None = None,
    ) -> WebSearchResponse:
        preferences = preferences or WebSearchPreferences()

        try:
            cached = self._cache.get(query, preferences)
        except Exception as e:
            logger.warning(f"{__name__}:search - Cache read failed, treating as miss: {type(e).__name__}: {e}")
            cached = None
        if cached is not None:
            logger.info(f"{__name__}:search - Cache hit")
            return cached.model_copy(deep=True)

        response = await self._provider.search(query, preferences)

        try:
            self._cache.set(query, response.model_copy(deep=True), preferences)
        except Exception as e:
            logger.warning(f"{__name__}:search - Cache write failed: {type(e).__name__}: {e}")
        return response
