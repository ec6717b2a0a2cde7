"""API routers."""

from .agents import router as agents_router
from .cache import router as cache_router
from .chat import router as chat_router
from .health import router as health_router
from .knowledge import router as knowledge_router

__all__ = [
    "agents_router",
    "cache_router",
    "chat_router",
    "health_router",
    "knowledge_router",
]
