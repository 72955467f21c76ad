"""Cache entry and statistics models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour


class CacheEntry(BaseModel):
    """A cached generation artifact."""

    key: str
    data: Any = None
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    entries: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
