"""Cache strategy protocol.

Defines the interface every cache layer implements so that repositories
can swap caching behaviour without changing call sites.

Implementations include:
- MemoryCacheStrategy (process-local, optional max size)
- LocalStorageCacheStrategy (persistent keyed store, e.g. Redis)
- NoOpCacheStrategy (caching disabled)
- CompositeCacheStrategy (L1 -> Ln layering with backfill)
"""

from typing import Any, Protocol, runtime_checkable

from rti_repository.entities import CacheStats


@runtime_checkable
class CacheStrategy(Protocol):
    """Protocol for cache strategies.

    Any type that implements these coroutines satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from rti_repository.protocols import CacheStrategy

        cache: CacheStrategy = MemoryCacheStrategy(default_ttl=60_000)
        cache: CacheStrategy = CompositeCacheStrategy([memory, persistent])
        ```
    """

    async def get(self, key: str) -> Any | None:
        """Get a cached value.

        Args:
            key: The cache key

        Returns:
            The cached value, or None if absent or expired
        """
        ...

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        """Store a value, replacing any previous entry.

        Args:
            key: The cache key
            data: The value to cache
            ttl: Time-to-live in milliseconds (strategy default if None)
        """
        ...

    async def has(self, key: str) -> bool:
        """Check if key is present and not expired.

        Args:
            key: The cache key
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove a key.

        Args:
            key: The cache key
        """
        ...

    async def clear(self) -> None:
        """Remove every entry owned by this strategy."""
        ...


@runtime_checkable
class StatsReportingCache(Protocol):
    """Optional capability: caches that keep hit/miss counters."""

    async def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats with size, hits and misses
        """
        ...
