"""Authentication gates for the /api surface.

The user itself is resolved by the auth provider into the RequestContext.
This module only decides what an environment allows:

- Production blocks development-only endpoints with a 404.
- Production requires an authenticated user on every /api route except
  health checks and the public auth endpoints.

Both gates are driven by FeatureFlags resolved at startup.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request

from app.core.config import FeatureFlags
from app.core.context import RequestContext, get_request_context
from app.core.errors import AuthenticationAppError, NotFoundAppError
from app.schemas.auth import AuthenticatedUser

logger = logging.getLogger(__name__)

LOGIN_URL = "/api/login"

PUBLIC_API_PREFIXES: tuple[str, ...] = (
    "/api/health",
    "/api/auth/user",
    "/api/login",
    "/api/logout",
    "/api/auth/google",
    "/api/auth/callback",
)

DEV_ONLY_API_PREFIXES: tuple[str, ...] = (
    "/api/dev",
    "/api/test",
    "/api/debug",
    "/api/seed",
)


def _matches_prefix(path: str, prefixes: tuple[str, ...]) -> bool:
    return any(path == p or path.startswith(p + "/") for p in prefixes)


def is_public_path(path: str) -> bool:
    """Whether ``path`` is reachable without authentication."""

    if not (path == "/api" or path.startswith("/api/")):
        return True
    return _matches_prefix(path, PUBLIC_API_PREFIXES)


def is_dev_only_path(path: str) -> bool:
    return _matches_prefix(path, DEV_ONLY_API_PREFIXES)


async def block_dev_endpoints(
    request: Request,
    context: RequestContext = Depends(get_request_context),
) -> None:
    """Hide development-only API prefixes when the flags say so.

    Raises:
        NotFoundAppError: For dev-only paths while blocking is enabled.
    """

    flags: FeatureFlags = request.app.state.flags
    if flags.block_dev_endpoints and is_dev_only_path(context.path):
        logger.info("auth.dev_endpoint_blocked", extra={"path": context.path})
        raise NotFoundAppError(code="not_found", message="Not found")


async def require_authentication(
    request: Request,
    context: RequestContext = Depends(get_request_context),
) -> None:
    """Reject anonymous requests to protected /api routes.

    Raises:
        AuthenticationAppError: 401 when the route is protected and the
            context carries no user.
    """

    flags: FeatureFlags = request.app.state.flags
    if not flags.require_auth or is_public_path(context.path):
        return

    if context.user is None:
        logger.warning(
            "auth.required",
            extra={"path": context.path, "environment": flags.environment},
        )
        raise AuthenticationAppError(
            code="authentication_required",
            message="Authentication required",
            details={"login_url": LOGIN_URL},
        )


async def get_current_user(
    context: RequestContext = Depends(get_request_context),
) -> AuthenticatedUser:
    """FastAPI dependency returning the user or failing with 401.

    Raises:
        AuthenticationAppError: When the request is anonymous.
    """

    if context.user is None:
        raise AuthenticationAppError(
            code="not_authenticated",
            message="Not authenticated",
            details={"login_url": LOGIN_URL},
        )
    return context.user
