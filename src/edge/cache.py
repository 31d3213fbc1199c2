"""TTL cache for catalog snapshots."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Sequence, Tuple, TypeVar

from versioning.models import CatalogEntry

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with TTL."""

    value: T
    expires_at: float
    created_at: float = field(default_factory=time.time)

    def is_expired(self) -> bool:
        """Check if this entry has expired."""
        return time.time() > self.expires_at


class CatalogCache:
    """Reuses the storage listing for a few seconds.

    Snapshots are stored as tuples, so a request can never alter what the
    next request sees. A TTL of 0 disables caching entirely.
    """

    def __init__(self, loader: Callable[[], Sequence[CatalogEntry]], ttl: int = 0):
        """Initialize the catalog cache.

        Args:
            loader: Produces a fresh catalog listing.
            ttl: Time-to-live in seconds.
        """
        self._loader = loader
        self._ttl = ttl
        self._entry: Optional[CacheEntry[Tuple[CatalogEntry, ...]]] = None
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def snapshot(self) -> Tuple[CatalogEntry, ...]:
        """Return the current catalog, loading it when absent or expired.

        Called from executor threads; concurrent callers of an enabled cache
        share a single load.
        """
        if self._ttl <= 0:
            with self._lock:
                self._misses += 1
            return tuple(self._loader())

        with self._lock:
            if self._entry is not None and not self._entry.is_expired():
                self._hits += 1
                return self._entry.value

            self._misses += 1
            value = tuple(self._loader())
            self._entry = CacheEntry(value=value, expires_at=time.time() + self._ttl)
            return value

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "enabled": self._ttl > 0,
            "ttl": self._ttl,
            "hits": self._hits,
            "misses": self._misses,
            "cached_entries": len(self._entry.value) if self._entry else 0,
            "expired": self._entry.is_expired() if self._entry else None,
        }
