"""Typed per-request context threaded through dependencies and handlers.

Handlers declare ``context: RequestContext = Depends(get_request_context)``
instead of reading ad-hoc attributes off the request. FastAPI caches the
dependency per request, so gates and handlers see the same instance.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Request

from app.adapters.auth.base import AbstractAuthProvider
from app.adapters.rate_limit.base import UNKNOWN_CLIENT
from app.core.config import AppSettings
from app.core.logging import get_request_id
from app.schemas.auth import AuthenticatedUser


@dataclass(frozen=True)
class RequestContext:
    """Everything the request pipeline knows about the current request.

    Attributes:
        request_id: Correlation id (from X-Request-ID or generated).
        client_id: Identifier used for rate limiting.
        path: Request path.
        received_at: UTC time the context was built.
        user: Authenticated user, None for anonymous requests.
    """

    request_id: str
    client_id: str
    path: str
    received_at: datetime
    user: AuthenticatedUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def resolve_client_id(request: Request, *, trust_forwarded_for: bool = False) -> str:
    """Identify the client for rate limiting purposes.

    Args:
        request: Incoming request.
        trust_forwarded_for: Use the first X-Forwarded-For hop when present.

    Returns:
        Client address, or ``"unknown"`` when none is available.
    """

    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


async def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency building the RequestContext for this request."""

    app_settings: AppSettings = request.app.state.settings.app
    auth_provider: AbstractAuthProvider = request.app.state.auth_provider

    return RequestContext(
        request_id=get_request_id() or str(uuid.uuid4()),
        client_id=resolve_client_id(
            request, trust_forwarded_for=app_settings.trust_forwarded_for
        ),
        path=request.url.path,
        received_at=datetime.now(timezone.utc),
        user=await auth_provider.authenticate(request),
    )
