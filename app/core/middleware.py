"""HTTP middlewares for request correlation and security headers.

request_id_middleware:
- Accepts incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars for access throughout the request lifecycle
- Injects request_id and total duration into response headers
- Emits one ``request.completed`` access log line
- Clears context after request completion to prevent context leaks

security_headers_middleware adds the static browser hardening headers.

Usage:
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from app.core.config import Settings
from app.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


def _settings_for(request: Request) -> Settings:
    return request.app.state.settings


async def request_id_middleware(request: Request, call_next) -> Response:
    """HTTP middleware for request ID generation and propagation.

    If the client provides the configured request id header (default
    X-Request-ID), that value is used. Otherwise a new UUID is generated.
    The id is echoed back in the response headers and stored in contextvars
    so every log line emitted while handling the request carries it.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with request id and duration
            headers added.
    """

    header_name = _settings_for(request).log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def security_headers_middleware(request: Request, call_next) -> Response:
    """Add static security headers to every response when enabled."""

    response: Response = await call_next(request)
    if not request.app.state.flags.security_headers:
        return response

    max_age = _settings_for(request).app.hsts_max_age_seconds
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    response.headers.setdefault(
        "Strict-Transport-Security", f"max-age={max_age}; includeSubDomains"
    )
    return response
