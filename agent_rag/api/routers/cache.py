"""
Result cache API endpoints.

Routes: GET /cache/stats, DELETE /cache

Dependencies: agent_rag.core.cache
System role: Web search cache administration
"""

from fastapi import APIRouter, Depends, status

from agent_rag.api.deps import get_result_cache
from agent_rag.core.cache.result_cache import CacheStats, ResultCache

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/stats", response_model=CacheStats)
async def cache_stats(cache: ResultCache = Depends(get_result_cache)) -> CacheStats:
    """Live entry count and insertion time range."""
    return cache.stats()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(cache: ResultCache = Depends(get_result_cache)) -> None:
    """Drop every cached search response."""
    cache.clear()
