"""In-memory artifact cache with TTL and creation-time eviction."""

from __future__ import annotations

import copy
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from paintgen.cache.keys import fingerprint_key
from paintgen.cache.stats import DEFAULT_TTL_SECONDS, CacheEntry, CacheStats

logger = logging.getLogger(__name__)

_DEFAULT_MAX_SIZE = 50


class CacheStore:
    """Bounded key/value store for generated artifacts.

    Entries live for ``ttl_seconds`` from creation. When the store is full,
    ``set`` first drops expired entries, then the entries with the oldest
    ``created_at``. Reads never refresh an entry's age.
    """

    def __init__(
        self,
        max_size: int = _DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._entries: dict[str, CacheEntry] = {}
        self._max_size = max_size
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._stats = CacheStats(max_size=max_size)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, prefix: str, params: Any) -> Any | None:
        """Return a copy of the cached value, or None on miss or expiry."""
        key = fingerprint_key(prefix, params)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                logger.debug("Cache miss: %s", key)
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                logger.debug("Cache entry expired: %s", key)
                return None
            self._stats.hits += 1
            logger.debug("Cache hit: %s", key)
            return copy.deepcopy(entry.data)

    def set(self, prefix: str, params: Any, value: Any) -> None:
        key = fingerprint_key(prefix, params)
        with self._lock:
            if len(self._entries) >= self._max_size:
                self._cleanup()
            now = self._clock()
            # Re-insert so dict order follows created_at
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                key=key,
                data=copy.deepcopy(value),
                created_at=now,
                expires_at=now + self._ttl_seconds,
            )

    def delete(self, prefix: str, params: Any) -> None:
        key = fingerprint_key(prefix, params)
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def close(self) -> None:
        """Tear the store down; entries are not persisted."""
        self.clear()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            return self._stats.model_copy(update={"entries": len(self._entries)})

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _cleanup(self) -> None:
        """Drop expired entries, then the oldest ones if still full.

        Caller must hold the lock.
        """
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._stats.expirations += len(expired)

        if len(self._entries) >= self._max_size:
            # sorted() is stable: equal timestamps keep insertion order
            by_age = sorted(self._entries.values(), key=lambda e: e.created_at)
            overflow = len(self._entries) - self._max_size + 1
            for entry in by_age[:overflow]:
                del self._entries[entry.key]
            self._stats.evictions += overflow
            logger.debug("Evicted %d oldest cache entries", overflow)
