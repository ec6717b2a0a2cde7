"""Domain models and API schemas."""

from agent_rag.models.chat import ConversationTurn, TurnRole
from agent_rag.models.citation import Citation
from agent_rag.models.web_search import (
    SearchEngine,
    WebSearchPreferences,
    WebSearchResponse,
    WebSearchResult,
)

__all__ = [
    "Citation",
    "ConversationTurn",
    "SearchEngine",
    "TurnRole",
    "WebSearchPreferences",
    "WebSearchResponse",
    "WebSearchResult",
]
