"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    agents_router,
    cache_router,
    chat_router,
    health_router,
    knowledge_router,
)

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(agents_router)
api_router.include_router(knowledge_router)
api_router.include_router(chat_router)
api_router.include_router(cache_router)

__all__ = ["api_router"]
