"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_agent_registry,
    get_chat_service,
    get_knowledge_service,
    get_result_cache,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_agent_registry",
    "get_chat_service",
    "get_knowledge_service",
    "get_result_cache",
    "get_service_cache",
    "get_settings_dependency",
]
