# src/cache/memory_store.py — v1
"""In-process TTL cache store.

Entries expire lazily: an expired entry is dropped the next time it is read.
Entries that are never read again stay until clear() or process exit.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from firstcontact.cache.base_cache_store import BaseCacheStore
from firstcontact.cache.models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed response cache with per-entry TTL."""

    def __init__(
        self,
        default_ttl: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        _check_ttl(default_ttl)
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, fingerprint: str) -> Any | None:
        """Retrieve a payload by fingerprint."""
        entry = self._entries.get(fingerprint)
        if entry is not None and not entry.is_expired(self._clock()):
            self._hits += 1
            return entry.payload
        if entry is not None:
            del self._entries[fingerprint]
            logger.debug("Evicted expired cache entry %s", fingerprint[:12])
        self._misses += 1
        return None

    def set(self, fingerprint: str, payload: Any, ttl_seconds: int | None = None) -> None:
        """Store a payload for ttl_seconds (default TTL when None)."""
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        _check_ttl(ttl)
        self._entries[fingerprint] = CacheEntry(
            fingerprint=fingerprint,
            payload=payload,
            expires_at=self._clock() + ttl,
        )

    def delete(self, fingerprint: str) -> None:
        """Remove a cache entry."""
        self._entries.pop(fingerprint, None)

    def clear(self) -> int:
        """Drop every entry; counters are kept."""
        removed = len(self._entries)
        self._entries.clear()
        logger.info("Cleared %d cache entries", removed)
        return removed

    def size(self) -> int:
        return len(self._entries)

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=self.size())


def _check_ttl(ttl: int) -> None:
    """TTL must be a positive integer number of seconds."""
    if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
        raise ValueError(f"ttl_seconds must be a positive integer, got {ttl!r}")
