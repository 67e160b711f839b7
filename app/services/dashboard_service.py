"""Dashboard service backing the placeholder dashboard API.

The summary is static today, but it is produced through the response cache
the way a real backend call would be, so swapping in a data source only
touches ``_load_summary``.
"""

from __future__ import annotations

import logging

from app.schemas.dashboard import DashboardResponse
from app.utils.simple_cache import SimpleTTLCache, build_cache_key

logger = logging.getLogger(__name__)

# Bump to invalidate cached summaries when the payload shape changes
SUMMARY_VERSION = "v1"

DASHBOARD_FEATURES: tuple[str, ...] = (
    "AI-Powered Coaching",
    "Wellness Analytics",
    "HIPAA Compliant",
    "Personalized Experience",
)


class DashboardService:
    """Builds dashboard payloads, memoized in the response cache."""

    def __init__(
        self,
        cache: SimpleTTLCache,
        *,
        site_name: str,
        ttl_seconds: float | None = None,
    ) -> None:
        self._cache = cache
        self._site_name = site_name
        self._ttl_seconds = ttl_seconds

    def summary_cache_key(self) -> str:
        return build_cache_key(self._site_name, SUMMARY_VERSION, namespace="dashboard:summary")

    async def _load_summary(self) -> DashboardResponse:
        logger.info("dashboard.summary_built", extra={"site_name": self._site_name})
        return DashboardResponse(
            message=f"{self._site_name} Dashboard API",
            status="operational",
            features=list(DASHBOARD_FEATURES),
        )

    async def get_summary(self) -> DashboardResponse:
        """Return the dashboard summary, building it on a cache miss."""

        return await self._cache.get_or_compute(
            self.summary_cache_key(),
            self._load_summary,
            ttl_seconds=self._ttl_seconds,
        )
