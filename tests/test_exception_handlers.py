"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    AuthenticationAppError,
    NotFoundAppError,
    RateLimitAppError,
    ValidationAppError,
)
from app.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


def _body(response) -> dict:
    raw = response.body if isinstance(response.body, bytes) else bytes(response.body)
    return json.loads(raw.decode())


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(code="test_validation", message="Test validation error")

        response = client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "test_validation"
        assert data["error"]["message"] == "Test validation error"
        assert "request_id" in data["error"]
        assert "details" not in data["error"]

    def test_authentication_error_returns_401(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-auth")
        async def test_endpoint():
            raise AuthenticationAppError(
                code="authentication_required",
                message="Authentication required",
                details={"login_url": "/api/login"},
            )

        response = client.get("/test-auth")

        assert response.status_code == 401
        data = response.json()
        assert data["error"]["code"] == "authentication_required"
        assert data["error"]["details"] == {"login_url": "/api/login"}

    def test_not_found_error_returns_404(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-missing")
        async def test_endpoint():
            raise NotFoundAppError(code="not_found", message="Not found")

        response = client.get("/test-missing")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Not found"


class TestRateLimitHandler:
    def test_rate_limit_error_uses_flat_body(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-throttle")
        async def test_endpoint():
            raise RateLimitAppError(retry_after=42, headers={"Retry-After": "42"})

        response = client.get("/test-throttle")

        assert response.status_code == 429
        assert response.json() == {"error": "Too many requests", "retryAfter": 42}
        assert response.headers["Retry-After"] == "42"

    def test_rate_limit_error_is_an_app_error(self):
        exc = RateLimitAppError(retry_after=3)

        assert isinstance(exc, AppError)
        assert exc.code == "rate_limited"
        assert str(exc) == "Too many requests"


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_handler_registered(self, app_with_handlers: FastAPI):
        assert Exception in app_with_handlers.exception_handlers

    def test_general_exception_handler_logic(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = RuntimeError("Unexpected error: backend connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = _body(response)
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert data["error"]["message"] == "Internal server error"
        assert "backend connection" not in json.dumps(data)

    def test_general_exception_handler_never_leaks_stack_trace(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("details")))

        text = json.dumps(_body(response))
        assert "Traceback" not in text
        assert "ValueError" not in text

    def test_unhandled_route_error_returns_500(self, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-crash")
        async def test_endpoint():
            raise RuntimeError("boom")

        client = TestClient(app_with_handlers, raise_server_exceptions=False)
        response = client.get("/test-crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "internal_server_error"


class TestErrorHandlerIntegration:
    def test_setup_exception_handlers_registers_handlers(self, app_with_handlers: FastAPI):
        assert AppError in app_with_handlers.exception_handlers
        assert RateLimitAppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers

    def test_multiple_handler_setups_does_not_fail(self):
        app = FastAPI()

        setup_exception_handlers(app)
        setup_exception_handlers(app)

        assert AppError in app.exception_handlers
