# src/cache/models.py — v2
"""Cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Single cache entry linking a request fingerprint to a routed result."""

    fingerprint: str
    payload: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """An entry is dead from its expiry instant onward."""
        return now >= self.expires_at


class CacheStats(BaseModel):
    """Hit/miss counters and current size of a response cache."""

    hits: int = 0
    misses: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        """Hit rate in percent, rounded to one decimal."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return round(self.hits / total * 100, 1)
