"""Pydantic schemas for authentication responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthenticatedUser(BaseModel):
    """User resolved by the auth provider for the current request."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(..., description="Stable user identifier.")
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    is_admin: bool = False
    role: Literal["user", "admin", "moderator"] = "user"
    subscription_status: str | None = None
    subscription_tier: str = "free"


class AuthUserResponse(BaseModel):
    """Response for the current-user endpoint."""

    authenticated: bool = True
    user: AuthenticatedUser


class AuthActionResponse(BaseModel):
    success: bool
    message: str
