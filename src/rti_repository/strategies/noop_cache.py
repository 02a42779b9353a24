"""Cache strategy that caches nothing."""

from typing import Any


class NoOpCacheStrategy:
    """Null-object cache: every lookup misses and writes are discarded.

    Use it to disable caching for a repository without touching call sites.
    """

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        return None

    async def has(self, key: str) -> bool:
        return False

    async def delete(self, key: str) -> None:
        return None

    async def clear(self) -> None:
        return None
