"""Tests for settings and feature flag resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.core.config import AppSettings, Settings, resolve_feature_flags


def _settings(app_env: str, **overrides) -> Settings:
    return Settings(app_env=app_env, app=AppSettings(**overrides))


def test_defaults_match_documented_values():
    cfg = AppSettings()

    assert cfg.rate_limit_requests == 100
    assert cfg.rate_limit_window_seconds == 60
    assert cfg.cache_ttl_seconds == 300
    assert cfg.cache_max_entries == 1000
    assert cfg.port == 3000


@pytest.mark.parametrize("env", ["development", "testing", "staging"])
def test_non_production_flags(env: str):
    flags = resolve_feature_flags(_settings(env))

    assert flags.environment == env
    assert flags.mock_auth_enabled is True
    assert flags.require_auth is False
    assert flags.strict_rate_limit is False
    assert flags.block_dev_endpoints is False
    assert flags.security_headers is True


def test_production_flags():
    flags = resolve_feature_flags(_settings("Production"))

    assert flags.environment == "production"
    assert flags.mock_auth_enabled is False
    assert flags.require_auth is True
    assert flags.strict_rate_limit is True
    assert flags.block_dev_endpoints is True


def test_explicit_settings_override_environment_defaults():
    flags = resolve_feature_flags(
        _settings(
            "production",
            mock_auth_enabled=True,
            require_auth=False,
            rate_limit_strict=False,
            security_headers_enabled=False,
        )
    )

    assert flags.mock_auth_enabled is True
    assert flags.require_auth is False
    assert flags.strict_rate_limit is False
    assert flags.security_headers is False


def test_flags_are_immutable():
    flags = resolve_feature_flags(_settings("development"))

    with pytest.raises(AttributeError):
        flags.require_auth = True  # type: ignore[misc]


def test_env_vars_are_read_with_prefix(monkeypatch):
    monkeypatch.setenv("APP_RATE_LIMIT_REQUESTS", "7")
    monkeypatch.setenv("APP_CACHE_MAX_ENTRIES", "12")

    cfg = AppSettings()

    assert cfg.rate_limit_requests == 7
    assert cfg.cache_max_entries == 12


@pytest.mark.parametrize(
    "overrides",
    [
        {"rate_limit_requests": 0},
        {"rate_limit_window_seconds": 0},
        {"cache_max_entries": 0},
        {"cache_ttl_seconds": 0},
    ],
)
def test_invalid_values_are_rejected(overrides: dict):
    with pytest.raises(ValidationError):
        AppSettings(**overrides)
