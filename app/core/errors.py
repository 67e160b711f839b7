"""Application-level exception types.

This module defines domain errors raised by gates, dependencies and services,
enabling consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    login_url: str
    path: str
    retry_after: int
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class AuthenticationAppError(AppError):
    """Raised when a protected route is hit without an authenticated user."""


class NotFoundAppError(AppError):
    """Raised for routes that do not exist (or are hidden in this environment)."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when a client exceeded its request quota for the current window.

    Recoverable: the client may retry after ``retry_after`` seconds.
    """

    code: str = "rate_limited"
    message: str = "Too many requests"
    details: ErrorDetails | None = None
    retry_after: int = 0
    headers: dict[str, str] = field(default_factory=dict)
