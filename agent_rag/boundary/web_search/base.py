"""
Web search provider interface.

Dependencies: agent_rag.models
System role: Web search contract
"""

from abc import ABC, abstractmethod

from agent_rag.models.web_search import WebSearchPreferences, WebSearchResponse


class WebSearchProvider(ABC):
    """Returns ranked web results for a query."""

    @abstractmethod
    async def search(
        self,
        query: str,
        preferences: WebSearchPreferences | None = None,
    ) -> WebSearchResponse:
        """
        Run a web search.

        Raises:
            ServiceError: On provider failure
        """
