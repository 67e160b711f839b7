"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
- Each client's window starts with its first request, it is not aligned to
  wall-clock boundaries.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.rate_limit.base import UNKNOWN_CLIENT, AbstractRateLimiter, RateLimitResult


@dataclass
class _WindowState:
    count: int
    reset_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per client key.

    A client gets ``limit`` admissions per window. The window opens on the
    first request seen from the client (or the first request after the
    previous window ended) and lasts ``window_seconds``. Requests beyond the
    quota are rejected without consuming anything until the window ends.

    Important:
        This limiter is per-process only. If the app runs with multiple
        workers, each worker enforces its own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int = 100,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of admitted requests per window.
            window_seconds: Size of the fixed window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _purge_expired_locked(self, now: float) -> None:
        expired = [k for k, state in self._state_by_key.items() if now > state.reset_at]
        for key in expired:
            del self._state_by_key[key]

    def _get_or_open_window_locked(self, key: str, now: float) -> _WindowState:
        state = self._state_by_key.get(key)
        if state is None or now > state.reset_at:
            state = _WindowState(count=0, reset_at=now + self._window_seconds)
            self._state_by_key[key] = state
        return state

    def check(self, key: str | None, *, now: float | None = None) -> RateLimitResult:
        """Admit or reject one request for the provided key.

        Checks the current window usage and increments it when the request
        is admitted. A rejected request leaves the window untouched.

        Args:
            key: Client identifier; falsy keys fall back to ``"unknown"``.
            now: Current UNIX time in seconds (defaults to the clock).

        Returns:
            RateLimitResult with allowance decision and metadata.
        """
        key = key or UNKNOWN_CLIENT
        if now is None:
            now = self._clock()

        with self._lock:
            self._purge_expired_locked(now)
            state = self._get_or_open_window_locked(key, now)

            if state.count >= self._limit:
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=0,
                    reset_at=int(math.ceil(state.reset_at)),
                    retry_after_seconds=max(0, int(math.ceil(state.reset_at - now))),
                )

            state.count += 1
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - state.count,
                reset_at=int(math.ceil(state.reset_at)),
                retry_after_seconds=None,
            )

    def peek(self, key: str | None) -> tuple[int, float] | None:
        """Return ``(count, reset_at)`` for a key without touching it."""
        with self._lock:
            state = self._state_by_key.get(key or UNKNOWN_CLIENT)
            if state is None:
                return None
            return state.count, state.reset_at
