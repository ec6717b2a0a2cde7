"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: agent_rag.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from agent_rag.api.deps import ServiceCache, get_service_cache


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    cache: ServiceCache = Depends(get_service_cache),
) -> HealthResponse:
    """Vector store health check."""
    try:
        store = cache.vector_store
    except Exception as e:
        return HealthResponse(status="unhealthy", message=f"Vector store unavailable: {e}")
    return HealthResponse(status="healthy", message=f"{type(store).__name__} accessible")
