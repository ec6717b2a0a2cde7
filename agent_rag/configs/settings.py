"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from agent_rag.configs.base import BaseSettings
from agent_rag.configs.orchestrator import OrchestratorSettings
from agent_rag.configs.vector_store import VectorStoreSettings
from agent_rag.configs.web_search import WebSearchSettings
from agent_rag.core.document_processing.configs import DocumentPipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    vector_store: VectorStoreSettings = VectorStoreSettings()
    document_pipeline: DocumentPipelineSettings = DocumentPipelineSettings()
    web_search: WebSearchSettings = WebSearchSettings()
    orchestrator: OrchestratorSettings = OrchestratorSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from agent_rag.configs import get_settings
        settings = get_settings()
    """
    return Settings()
