"""
Local Cache Manager - region-based get-or-compute cache.

Features:
- Named regions, each with its own TTL
- LRU eviction per region above ``max_entries``
- Single-flight population: at most one factory call per (region, key) is in
  flight; concurrent callers for the same key wait for it instead of
  duplicating the remote call
- Explicit per-key invalidation; an invalidation that lands while a value is
  being computed prevents that (now stale) value from being stored
- Per-key locks and in-flight bookkeeping live only while a populate is
  pending, so invalidated or expired keys leave nothing behind

Usage:
    cache = LocalCacheManager(region_ttls={"CartRegion": 300})

    cart = await cache.get_or_compute("CartBuilder:abc", "CartRegion", load_cart)
    await cache.invalidate("CartBuilder:abc", "CartRegion")
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry:
    """Entrada de caché con metadatos"""

    key: str
    value: Any
    timestamp: float
    ttl: float
    access_count: int = 0

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp > self.ttl


class LocalCacheManager:
    """
    In-process cache shared by every request of a storefront instance.

    Cached values are returned by reference, so a cached aggregate that is
    mutated must be invalidated by whoever mutates it.
    """

    def __init__(
        self,
        region_ttls: dict[str, float] | None = None,
        default_ttl: float = 300,
        max_entries: int = 10000,
    ):
        """
        Args:
            region_ttls: TTL in seconds per region name
            default_ttl: TTL for regions without an explicit entry
            max_entries: Maximum entries per region before LRU eviction
        """
        self.region_ttls = dict(region_ttls or {})
        self.default_ttl = default_ttl
        self.max_entries = max_entries

        self._regions: dict[str, OrderedDict[str, CacheEntry]] = {}
        # Lock per (region, key) with the number of callers holding or awaiting it
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}
        self._lock_users: dict[tuple[str, str], int] = {}
        # Invalidations seen per (region, key) while its factory runs
        self._in_flight: dict[tuple[str, str], int] = {}

        self._stats: dict[str, int] = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "invalidations": 0,
            "evictions": 0,
        }

    def _region(self, region: str) -> OrderedDict[str, CacheEntry]:
        return self._regions.setdefault(region, OrderedDict())

    def _acquire_lock_ref(self, lock_key: tuple[str, str]) -> asyncio.Lock:
        """Get or create the lock for a cache key and register one more user."""
        lock = self._locks.get(lock_key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[lock_key] = lock
            self._lock_users[lock_key] = 0
        self._lock_users[lock_key] += 1
        return lock

    def _release_lock_ref(self, lock_key: tuple[str, str]) -> None:
        self._lock_users[lock_key] -= 1
        if self._lock_users[lock_key] == 0:
            del self._lock_users[lock_key]
            del self._locks[lock_key]

    def _lookup(self, region: str, key: str) -> CacheEntry | None:
        entries = self._region(region)
        entry = entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(time.monotonic()):
            del entries[key]
            return None
        entries.move_to_end(key)
        entry.access_count += 1
        return entry

    def _store(self, region: str, key: str, value: Any) -> None:
        entries = self._region(region)
        entries[key] = CacheEntry(
            key=key,
            value=value,
            timestamp=time.monotonic(),
            ttl=self.region_ttls.get(region, self.default_ttl),
        )
        entries.move_to_end(key)
        self._stats["sets"] += 1

        while len(entries) > self.max_entries:
            entries.popitem(last=False)
            self._stats["evictions"] += 1

    async def get_or_compute(self, key: str, region: str, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached value for ``key`` or compute, store and return it.

        Args:
            key: Cache key
            region: Region name (selects the TTL)
            factory: Coroutine function producing the value on a miss

        Returns:
            Cached or freshly computed value

        Raises:
            Whatever ``factory`` raises; nothing is cached in that case.
        """
        entry = self._lookup(region, key)
        if entry is not None:
            self._stats["hits"] += 1
            return entry.value

        lock_key = (region, key)
        lock = self._acquire_lock_ref(lock_key)
        try:
            async with lock:
                # A concurrent caller may have populated the key while we waited
                entry = self._lookup(region, key)
                if entry is not None:
                    self._stats["hits"] += 1
                    return entry.value

                self._stats["misses"] += 1
                logger.debug(f"Cache miss for {region}/{key}, computing")
                self._in_flight[lock_key] = 0
                try:
                    value = await factory()
                    if self._in_flight[lock_key] == 0:
                        self._store(region, key, value)
                    else:
                        logger.debug(f"Cache key {region}/{key} invalidated during compute, not storing")
                finally:
                    del self._in_flight[lock_key]
                return value
        finally:
            self._release_lock_ref(lock_key)

    async def invalidate(self, key: str, region: str) -> bool:
        """
        Remove a key from a region.

        Returns:
            True if an entry was removed
        """
        lock_key = (region, key)
        if lock_key in self._in_flight:
            self._in_flight[lock_key] += 1
        self._stats["invalidations"] += 1
        removed = self._region(region).pop(key, None) is not None
        if removed:
            logger.debug(f"Invalidated cache key {region}/{key}")
        return removed

    async def clear_region(self, region: str) -> int:
        """Remove every entry of a region. Returns the number removed."""
        entries = self._region(region)
        count = len(entries)
        for key in list(entries):
            await self.invalidate(key, region)
        return count

    def get_stats(self) -> dict[str, Any]:
        """Cache statistics for monitoring."""
        total_requests = self._stats["hits"] + self._stats["misses"]
        hit_rate = (self._stats["hits"] / max(total_requests, 1)) * 100
        return {
            **self._stats,
            "hit_rate": f"{hit_rate:.1f}%",
            "pending_keys": len(self._locks),
            "regions": {name: len(entries) for name, entries in self._regions.items()},
        }
