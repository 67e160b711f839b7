"""Pydantic schemas for health responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CacheStats(BaseModel):
    size: int = Field(..., description="Entries currently held by the response cache.")
    max: int = Field(..., description="Configured cache capacity.")


class HealthResponse(BaseModel):
    """Liveness payload used by load balancers and monitoring."""

    status: str = Field("ok", description="Always 'ok' while the process serves requests.")
    timestamp: str = Field(..., description="ISO-8601 UTC time of the check.")
    environment: str = Field(..., description="Environment the server runs in.")
    cache: CacheStats
