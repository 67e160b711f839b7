from __future__ import annotations

from fastapi import APIRouter, Request

from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api", tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard_summary(request: Request) -> DashboardResponse:
    """Dashboard summary for the single-page app.

    Served from the response cache; rebuilt once per cache TTL.
    """
    service: DashboardService = request.app.state.dashboard_service
    return await service.get_summary()
