"""
Web search models.

Search preferences sent to a provider and the normalized response shape.

Dependencies: pydantic
System role: Web search contracts
"""

from enum import Enum

from pydantic import BaseModel, Field


class SearchEngine(str, Enum):
    """Supported search engines."""

    GOOGLE = "google"
    BING = "bing"


class WebSearchPreferences(BaseModel):
    """Per-request search preferences (also part of the result cache key)."""

    max_results: int = Field(default=5, ge=1, le=10)
    search_engine: SearchEngine = SearchEngine.GOOGLE
    include_images: bool = False
    safe_mode_enabled: bool = True


class WebSearchResult(BaseModel):
    """Single organic search result."""

    title: str
    url: str
    snippet: str = ""
    position: int = Field(ge=1, description="1-based rank in the result list")


class WebSearchResponse(BaseModel):
    """Normalized search response."""

    results: list[WebSearchResult] = Field(default_factory=list)
    total_results: int = 0
    search_time: float = Field(default=0.0, description="Provider-reported search time in seconds")
