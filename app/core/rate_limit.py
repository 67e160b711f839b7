"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: the app depends on a dependency function only.
- Explicit state: the limiter lives on ``app.state`` and is created by the
  app factory, so every app instance (and every test) gets its own.
- Swap-friendly: the storage backend sits behind AbstractRateLimiter.

Strategy:
- Fixed window per client address (see InMemoryFixedWindowRateLimiter).
- Non-strict mode limits /api routes only; strict mode limits every route.
- Health checks are never limited.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Depends, Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import AppSettings, FeatureFlags
from app.core.context import RequestContext, get_request_context
from app.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

RATE_LIMIT_EXEMPT_PATHS = frozenset({"/health", "/api/health"})


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create the limiter configured by settings."""

    return InMemoryFixedWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )


def is_rate_limited_path(path: str, *, strict: bool) -> bool:
    """Whether requests to ``path`` count against the client's quota."""

    if path in RATE_LIMIT_EXEMPT_PATHS:
        return False
    if strict:
        return True
    return path == "/api" or path.startswith("/api/")


def _hash_limiter_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


async def enforce_rate_limit(
    request: Request,
    context: RequestContext = Depends(get_request_context),
) -> None:
    """FastAPI dependency enforcing the per-client quota.

    When enabled, admits one request for the client. If the client already
    used its quota for the current window, raises RateLimitAppError, which
    the exception handlers turn into HTTP 429.

    Args:
        request: FastAPI request.
        context: Request context carrying the client identifier.

    Raises:
        RateLimitAppError: When the quota is exceeded.
    """

    app_settings: AppSettings = request.app.state.settings.app
    flags: FeatureFlags = request.app.state.flags

    if not app_settings.rate_limit_enabled:
        return
    if not is_rate_limited_path(context.path, strict=flags.strict_rate_limit):
        return

    limiter: AbstractRateLimiter = request.app.state.rate_limiter
    result = limiter.check(context.client_id)
    key_hash = _hash_limiter_key(context.client_id)

    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "window_s": app_settings.rate_limit_window_seconds,
            "retry_after_s": retry_after,
            "path": context.path,
        },
    )

    headers: dict[str, str] = {}
    if app_settings.rate_limit_include_headers:
        headers["Retry-After"] = str(retry_after)
        headers["X-RateLimit-Limit"] = str(result.limit)
        headers["X-RateLimit-Remaining"] = str(result.remaining)
        headers["X-RateLimit-Reset"] = str(result.reset_at)

    raise RateLimitAppError(retry_after=retry_after, headers=headers)
