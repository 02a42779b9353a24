"""In-process cache strategy."""

from typing import Any

from rti_repository.entities import CacheEntry, CacheStats
from rti_repository.utils import Clock, now_ms

DEFAULT_TTL = 5 * 60 * 1000  # 5 minutes


class MemoryCacheStrategy:
    """Dict-backed cache with TTL expiration and an optional size bound.

    This class satisfies the CacheStrategy and StatsReportingCache
    protocols through structural typing.

    Fast, but data is lost when the process exits. When ``max_size`` is
    set and the cache is full, inserting a new key evicts the single
    oldest-inserted entry. Eviction is by insertion order, not recency
    of access.

    Example:
        ```python
        cache = MemoryCacheStrategy(default_ttl=5 * 60 * 1000)
        await cache.set("rti:1", record)
        record = await cache.get("rti:1")
        ```
    """

    def __init__(
        self,
        default_ttl: int | None = None,
        max_size: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the memory cache.

        Args:
            default_ttl: TTL in milliseconds for writes without one. Defaults to 5 minutes.
            max_size: Maximum number of entries. None means unbounded.
            clock: Source of epoch milliseconds. Defaults to wall-clock time.
        """
        if max_size is not None and max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self._entries: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl if default_ttl is not None else DEFAULT_TTL
        self._max_size = max_size
        self._clock = clock or now_ms
        self._hits = 0
        self._misses = 0

    def _lookup(self, key: str) -> CacheEntry | None:
        """Return the live entry for key, dropping it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None

        return entry

    async def get(self, key: str) -> Any | None:
        entry = self._lookup(key)
        if entry is None:
            self._misses += 1
            return None

        self._hits += 1
        return entry.data

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        if self._max_size is not None and key not in self._entries:
            if len(self._entries) >= self._max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

        self._entries[key] = CacheEntry(
            data=data,
            timestamp=self._clock(),
            ttl=ttl if ttl is not None else self._default_ttl,
        )

    async def has(self, key: str) -> bool:
        """Check for a live entry without touching the hit/miss counters.

        This is not ``await get(key) is not None``: has() never counts a
        hit or a miss, including the checks made during composite backfill.
        Expired entries are still dropped.
        """
        return self._lookup(key) is not None

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    async def get_stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), hits=self._hits, misses=self._misses)

    @property
    def default_ttl(self) -> int:
        """Get the default TTL in milliseconds."""
        return self._default_ttl

    @property
    def max_size(self) -> int | None:
        """Get the size bound (None if unbounded)."""
        return self._max_size
