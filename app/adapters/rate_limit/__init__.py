"""Rate limiting adapters.

This package provides a small abstraction layer so the server can start with
an in-memory limiter and later migrate to a shared store without changing
the HTTP layer.
"""

from app.adapters.rate_limit.base import UNKNOWN_CLIENT, AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "UNKNOWN_CLIENT",
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
