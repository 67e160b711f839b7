"""Static providers used in development and for anonymous deployments."""

from __future__ import annotations

from fastapi import Request

from app.adapters.auth.base import AbstractAuthProvider
from app.schemas.auth import AuthenticatedUser

DEV_USER = AuthenticatedUser(
    id="dev-user-123",
    username="testuser",
    email="test@example.com",
    first_name="Friend",
    last_name="User",
    profile_image_url=None,
    is_admin=False,
    role="user",
    subscription_status=None,
    subscription_tier="free",
)


class MockAuthProvider(AbstractAuthProvider):
    """Treat every request as coming from one fixed user."""

    def __init__(self, user: AuthenticatedUser = DEV_USER) -> None:
        self._user = user

    async def authenticate(self, request: Request) -> AuthenticatedUser | None:
        return self._user


class AnonymousAuthProvider(AbstractAuthProvider):
    """Never authenticates anyone."""

    async def authenticate(self, request: Request) -> AuthenticatedUser | None:
        return None
