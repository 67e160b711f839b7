"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins APP_ENV=testing before any app import so settings never pick up a
developer's .env.development file.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.app_factory import create_app
from app.core.config import AppSettings, LogSettings, Settings


def build_settings(app_env: str = "testing", **app_overrides: Any) -> Settings:
    """Build isolated settings for one test app."""
    return Settings(
        app_env=app_env,
        app=AppSettings(**app_overrides),
        log=LogSettings(level="WARNING"),
    )


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    """Factory fixture returning a fresh app (fresh limiter and cache) per call."""

    def _make(app_env: str = "testing", **app_overrides: Any) -> FastAPI:
        return create_app(build_settings(app_env, **app_overrides))

    return _make


@pytest.fixture
def app(make_app: Callable[..., FastAPI]) -> FastAPI:
    return make_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client for a development-like app with mock auth enabled."""
    return TestClient(app)


@pytest.fixture
def production_client(make_app: Callable[..., FastAPI]) -> TestClient:
    """Test client for a production app (no mock user, auth gate on)."""
    return TestClient(make_app("production"))
