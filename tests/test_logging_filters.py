"""Tests for sensitive data filtering and JSON formatting in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from app.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    redact,
    set_request_id,
)


@pytest.fixture
def capture():
    """Logger wired with the production filters, writing JSON to a buffer."""

    logger = logging.getLogger("test_redaction")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_sensitive_filter_redacts_credentials(capture):
    logger, stream = capture

    logger.info(
        "test_event",
        extra={
            "authorization": "Bearer sk-secret-123",
            "cookie": "sid=abc",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()
    assert "sk-secret-123" not in output
    assert "sid=abc" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_client_identity(capture):
    logger, stream = capture

    logger.info(
        "client_event",
        extra={"client_ip": "203.0.113.7", "email": "test@example.com", "key_hash": "abcd"},
    )

    output = stream.getvalue()
    assert "203.0.113.7" not in output
    assert "test@example.com" not in output
    assert "abcd" in output


def test_sensitive_filter_allows_safe_fields(capture):
    logger, stream = capture

    logger.info(
        "safe_event",
        extra={
            "route": "/api/dashboard",
            "status_code": 200,
            "duration_ms": 150.5,
        },
    )

    record = json.loads(stream.getvalue())
    assert record["message"] == "safe_event"
    assert record["level"] == "info"
    assert record["route"] == "/api/dashboard"
    assert record["status_code"] == 200
    assert "[REDACTED]" not in stream.getvalue()


def test_sensitive_filter_redacts_nested_dicts(capture):
    logger, stream = capture

    logger.info(
        "nested_event",
        extra={
            "headers": {
                "Authorization": "secret-key",
                "user-agent": "pytest",
            },
            "safe_data": [{"count": 5, "password": "hunter2"}],
        },
    )

    output = stream.getvalue()
    assert "secret-key" not in output
    assert "hunter2" not in output
    assert "pytest" in output
    assert '"count": 5' in output


def test_request_id_from_context_is_attached(capture):
    logger, stream = capture
    set_request_id("req-123")

    logger.info("with_context")

    assert json.loads(stream.getvalue())["request_id"] == "req-123"


def test_redact_leaves_scalars_untouched():
    assert redact("plain") == "plain"
    assert redact({"token": "t", "n": 1}) == {"token": "[REDACTED]", "n": 1}
    assert redact(("a", {"secret": 1})) == ("a", {"secret": "[REDACTED]"})
