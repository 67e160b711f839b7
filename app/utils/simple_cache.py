"""In-memory TTL cache used to memoize expensive or repeated computations.

Designed for a single server process: minimal dependencies, thread-safe, and
easy to swap for a shared store while keeping the same interface.
"""

from __future__ import annotations

import inspect
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Awaitable, Callable, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

Compute = Callable[[], Union[T, Awaitable[T]]]

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_MAX_ENTRIES = 1000

_MISSING = object()


@dataclass
class CacheItem:
    """Container for cached values with expiration metadata."""

    value: Any
    expires_at: float


class SimpleTTLCache:
    """Thread-safe, in-memory TTL cache with LRU eviction.

    Expiry is absolute: reads never extend an entry's lifetime, only a new
    ``set`` does. Expired entries are dropped lazily when read, and purged
    before an insert would evict a live entry for capacity.

    Attributes:
        ttl_seconds: Default time-to-live applied when no override is given.
        max_entries: Maximum number of cached items.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[str, CacheItem] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SimpleTTLCache(ttl_seconds={self._ttl}, max_entries={self._max_entries}, "
            f"size={len(self._store)}, hits={self._hits}, misses={self._misses}, "
            f"evictions={self._evictions})"
        )

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: str) -> bool:
        return self._lookup(key, count=False) is not _MISSING

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def size(self) -> int:
        """Number of stored entries, including expired ones not yet purged."""
        with self._lock:
            return len(self._store)

    def _lookup(self, key: str, *, count: bool = True) -> Any:
        """Return the live value for key or ``_MISSING``, marking it recently used."""

        with self._lock:
            item = self._store.get(key)
            if item is None:
                if count:
                    self._misses += 1
                    logger.debug("cache.miss", extra={"cache_key": key[:32], "reason": "not_found"})
                return _MISSING

            if self._clock() > item.expires_at:
                self._evict_single_locked(key)
                if count:
                    self._misses += 1
                    logger.debug("cache.miss", extra={"cache_key": key[:32], "reason": "expired"})
                return _MISSING

            self._store.move_to_end(key)
            if count:
                self._hits += 1
                logger.debug("cache.hit", extra={"cache_key": key[:32]})
            return item.value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a cached value if it exists and is not expired.

        Args:
            key: Cache key.
            default: Returned when the key is missing or expired.

        Returns:
            Cached value or ``default``.
        """

        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store a value with TTL, evicting as needed.

        Args:
            key: Cache key.
            value: Value to store (any object, ``None`` included).
            ttl_seconds: Lifetime override; defaults to the cache TTL.
        """

        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            now = self._clock()
            if key not in self._store and len(self._store) >= self._max_entries:
                self._evict_expired_locked(now)
            self._store[key] = CacheItem(value=value, expires_at=now + ttl)
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

            logger.debug(
                "cache.set",
                extra={"cache_key": key[:32], "size": len(self._store), "ttl_s": ttl},
            )

    async def get_or_compute(
        self,
        key: str,
        compute: Compute[T],
        ttl_seconds: float | None = None,
    ) -> T:
        """Return the cached value for key, computing and storing it on a miss.

        ``compute`` takes no arguments and may return a value or an awaitable.
        It runs outside the cache lock, so concurrent misses on the same key
        may each compute; the last one to finish wins. If it raises, the
        exception propagates unchanged and nothing is stored.

        Args:
            key: Cache key.
            compute: Zero-argument callable producing the value.
            ttl_seconds: Lifetime override for the stored value.

        Returns:
            The cached or freshly computed value.
        """

        cached = self._lookup(key)
        if cached is not _MISSING:
            return cached

        result = compute()
        if inspect.isawaitable(result):
            result = await result

        self.set(key, result, ttl_seconds=ttl_seconds)
        return result

    def delete(self, key: str) -> bool:
        """Remove a key; returns whether it was present."""

        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all cached entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | float]:
        """Return lightweight cache metrics without exposing values."""

        with self._lock:
            return {
                "size": len(self._store),
                "max": self._max_entries,
                "ttl_seconds": self._ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _evict_single_locked(self, key: str) -> None:
        if self._store.pop(key, None) is not None:
            self._evictions += 1

    def _evict_expired_locked(self, now: float) -> None:
        expired_keys = [k for k, item in self._store.items() if now > item.expires_at]
        for key in expired_keys:
            self._evict_single_locked(key)

    def _evict_if_over_capacity_locked(self) -> None:
        while len(self._store) > self._max_entries:
            # popitem(last=False) removes the least recently used entry
            key, _ = self._store.popitem(last=False)
            self._evictions += 1
            logger.debug("cache.evicted", extra={"cache_key": key[:32], "reason": "capacity"})


def build_cache_key(*parts: Any, namespace: str | None = None) -> str:
    """Build a stable cache key from arbitrary parts.

    Args:
        *parts: Values identifying the computation (stringified).
        namespace: Optional readable prefix kept outside the digest.

    Returns:
        ``"<namespace>:<sha256>"`` or the bare hex digest.
    """

    hasher = sha256()
    for part in parts:
        hasher.update(str(part).encode("utf-8", errors="ignore"))
        hasher.update(b"\x1f")
    digest = hasher.hexdigest()
    return f"{namespace}:{digest}" if namespace else digest
