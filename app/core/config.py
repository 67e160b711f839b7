"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Environment-driven behavior (mock auth, strict rate limiting, production
gates) is resolved once into a ``FeatureFlags`` value by
``resolve_feature_flags`` and passed to the app factory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    BaseSettings pulls its values from the environment; type checkers still
    see the fields as constructor arguments, hence the ignore.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field(
        "json",
        description="Log format: 'json' for structured logs, 'plain' for humans",
    )
    output: str = Field(
        "stdout",
        description="Log destination: 'stdout' or 'file'",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    site_name: str = Field(
        "CoRegulateAI",
        description="Product name shown on the landing page and dashboard",
    )
    host: str = Field("0.0.0.0", description="Bind address for the ASGI server")
    port: int = Field(3000, description="Bind port for the ASGI server", ge=1, le=65535)

    mock_auth_enabled: bool | None = Field(
        None,
        description="Inject the static development user (default: on outside production)",
    )
    require_auth: bool | None = Field(
        None,
        description="Reject unauthenticated /api requests (default: on in production)",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        60,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_strict: bool | None = Field(
        None,
        description="Limit every route instead of /api only (default: on in production)",
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    trust_forwarded_for: bool = Field(
        False,
        description="Identify clients by the first X-Forwarded-For hop (behind a proxy)",
    )

    cache_ttl_seconds: float = Field(
        300,
        description="Default time-to-live for response cache entries",
        gt=0,
    )
    cache_max_entries: int = Field(
        1000,
        description="Maximum number of entries held by the response cache",
        ge=1,
    )

    security_headers_enabled: bool = Field(
        True,
        description="Add X-Frame-Options, HSTS and related headers to responses",
    )
    hsts_max_age_seconds: int = Field(
        31536000,
        description="max-age for the Strict-Transport-Security header",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@dataclass(frozen=True)
class FeatureFlags:
    """Behavior switches resolved once at startup.

    Attributes:
        environment: Normalized environment name.
        mock_auth_enabled: Serve the static development user to every request.
        require_auth: Gate protected /api routes behind authentication.
        strict_rate_limit: Apply the rate limiter to every route, not only /api.
        block_dev_endpoints: Answer 404 for development-only API prefixes.
        security_headers: Emit the static security headers.
    """

    environment: str
    mock_auth_enabled: bool
    require_auth: bool
    strict_rate_limit: bool
    block_dev_endpoints: bool
    security_headers: bool


def _pick(explicit: bool | None, default: bool) -> bool:
    return default if explicit is None else explicit


def resolve_feature_flags(cfg: Settings) -> FeatureFlags:
    """Resolve environment defaults and explicit overrides into flags.

    Production disables the mock user and turns on the auth gate, strict
    rate limiting and dev endpoint blocking. Every other environment behaves
    like development. Explicit ``APP_*`` values always win.

    Args:
        cfg: Loaded settings.

    Returns:
        FeatureFlags: Immutable flags for the app factory.
    """

    production = cfg.is_production
    return FeatureFlags(
        environment=cfg.app_env.lower(),
        mock_auth_enabled=_pick(cfg.app.mock_auth_enabled, not production),
        require_auth=_pick(cfg.app.require_auth, production),
        strict_rate_limit=_pick(cfg.app.rate_limit_strict, production),
        block_dev_endpoints=production,
        security_headers=cfg.app.security_headers_enabled,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
