"""
Web search boundary layer.

Dependencies: httpx
System role: Web search adapters
"""

from agent_rag.boundary.web_search.base import WebSearchProvider
from agent_rag.boundary.web_search.cached import CachedWebSearchProvider

__all__ = ["CachedWebSearchProvider", "WebSearchProvider"]
