"""Pydantic schemas for the dashboard API."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class DashboardResponse(BaseModel):
    """Static dashboard summary shown to signed-in users."""

    message: str = Field(..., description="Dashboard headline.")
    status: str = Field("operational", description="Platform status label.")
    features: List[str] = Field(
        default_factory=list,
        description="Feature names advertised on the dashboard.",
    )
