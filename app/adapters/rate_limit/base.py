"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped later with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

UNKNOWN_CLIENT = "unknown"


@dataclass(frozen=True)
class RateLimitResult:
    """Decision returned by a rate limit check.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        limit: Max requests per window.
        remaining: Remaining requests in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the client's window resets.
        retry_after_seconds: Seconds to wait before retrying, set only when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(self, key: str | None, *, now: float | None = None) -> RateLimitResult:
        """Admit or reject one request for ``key``.

        Args:
            key: Client identifier. Empty or missing keys share the
                ``UNKNOWN_CLIENT`` bucket.
            now: Current time in seconds; defaults to the limiter's clock.

        Returns:
            RateLimitResult describing whether the request was admitted.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def tracked_keys(self) -> int:
        """Number of client windows currently held in memory."""
        raise NotImplementedError
