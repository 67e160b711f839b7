from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.schemas.health import CacheStats, HealthResponse
from app.utils.simple_cache import SimpleTTLCache

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Reports liveness plus response cache occupancy. Used by load balancers
    and monitoring systems; never rate limited nor authenticated.

    Returns:
        HealthResponse: status, timestamp, environment and cache stats.
    """

    cache: SimpleTTLCache = request.app.state.response_cache
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=request.app.state.flags.environment,
        cache=CacheStats(size=cache.size, max=cache.max_entries),
    )
