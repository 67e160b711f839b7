from __future__ import annotations

from abc import ABC, abstractmethod

from fastapi import Request

from app.schemas.auth import AuthenticatedUser


class AbstractAuthProvider(ABC):
    """Interface for resolving the user behind an inbound request."""

    @abstractmethod
    async def authenticate(self, request: Request) -> AuthenticatedUser | None:
        """Return the authenticated user, or None for anonymous requests.

        Providers must not raise for unauthenticated requests; gating is the
        job of the HTTP layer.
        """
        raise NotImplementedError
