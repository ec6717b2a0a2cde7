"""
Web search configuration settings.

Google Custom Search credentials, default search preferences and the
result cache bounds.

Dependencies: pydantic, pydantic_settings
System role: Web search provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebSearchSettings(BaseSettings):
    """Web search provider and cache configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WEB_SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Google Custom Search API key")
    engine_id: str = Field(default="", description="Google Custom Search engine ID (cx)")
    endpoint: str = Field(
        default="https://www.googleapis.com/customsearch/v1",
        description="Custom Search JSON API endpoint",
    )

    max_results: int = Field(default=5, ge=1, le=10, description="Results per search")
    search_engine: str = Field(default="google", description="Search engine: 'google' or 'bing'")
    include_images: bool = Field(default=False, description="Include image results")
    safe_mode_enabled: bool = Field(default=True, description="Enable safe search")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout for search calls")

    cache_ttl_seconds: float = Field(default=3600.0, description="Search result cache TTL")
    cache_max_entries: int = Field(default=100, ge=1, description="Search result cache capacity")
