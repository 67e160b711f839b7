"""Application factory for the FastAPI app.

Centralizes app construction (state, middleware, handlers, routers) so each
call returns an isolated app: the rate limiter, response cache and auth
provider are created here and owned by ``app.state``, never by modules.
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI

from app.adapters.auth.factory import create_auth_provider
from app.api.routes import auth_router, dashboard_router, health_router, pages_router
from app.core.auth import block_dev_endpoints, require_authentication
from app.core.config import Settings, resolve_feature_flags, settings as default_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware, security_headers_middleware
from app.core.rate_limit import build_rate_limiter, enforce_rate_limit
from app.services.dashboard_service import DashboardService
from app.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Health", "description": "Liveness checks and cache occupancy."},
    {"name": "Auth", "description": "Current user and placeholder sign-in flow."},
    {"name": "Dashboard", "description": "Dashboard data for the single-page app."},
]


def create_app(cfg: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        cfg: Settings to build the app from; defaults to the process settings.

    Returns:
        Configured FastAPI app with state, middleware, handlers and routers.
    """
    cfg = cfg or default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)
    flags = resolve_feature_flags(cfg)

    app = FastAPI(
        title=f"{cfg.app.site_name} Web",
        description="Landing page, placeholder dashboard API and health checks.",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        # Order matters: throttle first, then hide dev routes, then gate auth
        dependencies=[
            Depends(enforce_rate_limit),
            Depends(block_dev_endpoints),
            Depends(require_authentication),
        ],
    )

    # Process-wide state, one instance per app
    response_cache = SimpleTTLCache(
        ttl_seconds=cfg.app.cache_ttl_seconds,
        max_entries=cfg.app.cache_max_entries,
    )
    app.state.settings = cfg
    app.state.flags = flags
    app.state.rate_limiter = build_rate_limiter(cfg.app)
    app.state.response_cache = response_cache
    app.state.auth_provider = create_auth_provider(flags)
    app.state.dashboard_service = DashboardService(
        response_cache, site_name=cfg.app.site_name
    )

    # Middleware (last registered runs first)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers; the page catch-all must stay last
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(pages_router)

    logger.info(
        "app.created",
        extra={
            "environment": flags.environment,
            "mock_auth_enabled": flags.mock_auth_enabled,
            "require_auth": flags.require_auth,
            "strict_rate_limit": flags.strict_rate_limit,
            "rate_limit_enabled": cfg.app.rate_limit_enabled,
            "rate_limit_requests": cfg.app.rate_limit_requests,
            "rate_limit_window_s": cfg.app.rate_limit_window_seconds,
            "cache_max_entries": cfg.app.cache_max_entries,
        },
    )
    return app
