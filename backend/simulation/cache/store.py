"""In-memory result cache with tag-based invalidation.

Entries carry tags (policy, scenario, tenant ids) so that every result
derived from a changed policy or scenario can be dropped in one call.
The cache is an ordinary object: construct one per process or tenant and
pass it to whatever needs it.
"""

import functools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

logger = logging.getLogger(__name__)


class CacheTTL:
    """Common time-to-live values, in seconds."""

    SHORT = 60.0
    MEDIUM = 5 * 60.0
    LONG = 30 * 60.0


class CacheKeys:
    """Key builders, so callers agree on naming."""

    @staticmethod
    def scenario_results(scenario_id: str, variant: Optional[str] = None) -> str:
        """Key for a scenario's results; *variant* separates runs of one scenario."""
        key = f"scenario:{scenario_id}:results"
        return f"{key}:{variant}" if variant else key


class CacheTags:
    """Tag builders for bulk invalidation."""

    ALL_SIMULATIONS = "all:simulations"

    @staticmethod
    def policy(policy_id: str) -> str:
        return f"policy:{policy_id}"

    @staticmethod
    def scenario(scenario_id: str) -> str:
        return f"scenario:{scenario_id}"


@dataclass
class CacheEntry:
    value: Any
    tags: frozenset[str]
    expires_at: Optional[float]
    created_at: float


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    size: int = 0
    hit_rate: float = 0.0


class InMemoryCache:
    """Key/value store with optional TTL and tag index.

    Parameters
    ----------
    clock : callable, optional
        Returns the current time in seconds. Defaults to ``time.monotonic``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._tag_index: dict[str, set[str]] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.RLock()

    def _expired(self, entry: CacheEntry) -> bool:
        return entry.expires_at is not None and self._clock() > entry.expires_at

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._expired(entry):
                self.delete(key)
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(
        self,
        key: str,
        value: Any,
        tags: Iterable[str] = (),
        ttl: Optional[float] = None,
    ) -> None:
        """Store *value*, replacing any previous entry and its tags.

        ``ttl=None`` keeps the entry until it is deleted or invalidated; any
        other value must be positive.
        """
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        with self._lock:
            if key in self._entries:
                self.delete(key)
            now = self._clock()
            entry = CacheEntry(
                value=value,
                tags=frozenset(tags),
                expires_at=now + ttl if ttl is not None else None,
                created_at=now,
            )
            self._entries[key] = entry
            for tag in entry.tags:
                self._tag_index.setdefault(tag, set()).add(key)

    def delete(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is None:
                return False
            for tag in entry.tags:
                keys = self._tag_index.get(tag)
                if keys is None:
                    continue
                keys.discard(key)
                if not keys:
                    del self._tag_index[tag]
            return True

    def has(self, key: str) -> bool:
        """Membership test that neither counts as a hit nor a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self._expired(entry):
                self.delete(key)
                return False
            return True

    def keys(self, tag: Optional[str] = None) -> list[str]:
        with self._lock:
            if tag is not None:
                return sorted(self._tag_index.get(tag, ()))
            return list(self._entries)

    def invalidate_tag(self, tag: str) -> int:
        """Delete every entry carrying *tag*; return how many were removed."""
        with self._lock:
            removed = sum(1 for key in list(self._tag_index.get(tag, ())) if self.delete(key))
        if removed:
            logger.debug("Invalidated %d cache entries for tag %s", removed, tag)
        return removed

    def invalidate_tags(self, tags: Iterable[str]) -> int:
        return sum(self.invalidate_tag(tag) for tag in tags)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._tag_index.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            lookups = self._hits + self._misses
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=self._live_count(),
                hit_rate=self._hits / lookups if lookups > 0 else 0.0,
            )

    def cleanup(self) -> int:
        """Evict expired entries; return how many were evicted."""
        with self._lock:
            expired = [key for key, entry in self._entries.items() if self._expired(entry)]
            for key in expired:
                self.delete(key)
        return len(expired)

    def _live_count(self) -> int:
        return sum(1 for entry in self._entries.values() if not self._expired(entry))

    def __len__(self) -> int:
        """Number of unexpired entries."""
        with self._lock:
            return self._live_count()


def cached(
    cache: InMemoryCache,
    key: Callable[..., str],
    tags: Optional[Callable[..., Iterable[str]]] = None,
    ttl: Optional[float] = None,
):
    """Memoize a function's result in *cache*.

    *key* and *tags* receive the same arguments as the wrapped function.
    ``None`` results are not distinguishable from misses and are recomputed.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = key(*args, **kwargs)
            hit = cache.get(cache_key)
            if hit is not None:
                return hit
            result = func(*args, **kwargs)
            entry_tags = tags(*args, **kwargs) if tags is not None else ()
            cache.set(cache_key, result, tags=entry_tags, ttl=ttl)
            return result

        return wrapper

    return decorator
