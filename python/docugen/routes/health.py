"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from docugen.cache import get_redis_cache

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    service: str = "docugen"
    version: str = "0.1.0"
    redis: str = "not_configured"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status. Does not require authentication.
    """
    redis_status = "not_configured"
    cache = get_redis_cache()
    if cache:
        if await cache.ping():
            redis_status = "ok"
        else:
            redis_status = "error"

    # Caching is optional, so a broken Redis only degrades the service
    overall_status = "degraded" if redis_status == "error" else "ok"

    return HealthResponse(
        status=overall_status,
        redis=redis_status,
    )
