# src/cache/base_cache_store.py — v2
"""Abstract response cache interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from firstcontact.cache.models import CacheStats


class BaseCacheStore(ABC):
    """Unified interface for response cache backends.

    Operations are synchronous so that a lookup or store never introduces a
    suspension point in the middle of a routed request.
    """

    @abstractmethod
    def get(self, fingerprint: str) -> Any | None:
        """Return the cached payload, or None on miss or expiry."""

    @abstractmethod
    def set(self, fingerprint: str, payload: Any, ttl_seconds: int | None = None) -> None:
        """Store a payload, overwriting any existing entry."""

    @abstractmethod
    def delete(self, fingerprint: str) -> None:
        """Remove a cache entry."""

    @abstractmethod
    def clear(self) -> int:
        """Remove all entries. Returns the number removed."""

    @abstractmethod
    def size(self) -> int:
        """Count of stored entries, including expired ones not yet swept."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Snapshot of hit/miss counters and size."""
