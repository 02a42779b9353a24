"""Layered cache strategy (L1 -> Ln)."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from rti_repository.protocols import CacheStrategy

logger = logging.getLogger(__name__)


class CompositeCacheStrategy:
    """Queries several cache strategies in order, fastest first.

    Layers are ordered from the fastest, most volatile (L1) to the slowest,
    most durable (Ln). A hit in a later layer is backfilled into the earlier
    layers that lack it. Writes, deletes and clears fan out to every layer
    concurrently.

    A failing layer never fails the composite: the error is logged and the
    layer is skipped (treated as a miss for reads).

    Example:
        ```python
        cache = CompositeCacheStrategy([
            MemoryCacheStrategy(),           # L1: fast
            LocalStorageCacheStrategy.create(),  # L2: persistent
        ])
        ```
    """

    def __init__(self, strategies: Sequence[CacheStrategy]) -> None:
        """Initialize the composite.

        Args:
            strategies: Cache layers, L1 first.

        Raises:
            ValueError: If no layers are given.
        """
        if not strategies:
            raise ValueError("CompositeCacheStrategy requires at least one strategy")
        self._strategies = list(strategies)

    async def get(self, key: str) -> Any | None:
        for index, strategy in enumerate(self._strategies):
            try:
                data = await strategy.get(key)
            except Exception as e:
                logger.warning(f"Cache layer L{index + 1} failed to get {key}: {e}")
                continue

            if data is not None:
                await self._backfill(key, data, index)
                return data

        return None

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        await self._fan_out("set", [s.set(key, data, ttl) for s in self._strategies])

    async def has(self, key: str) -> bool:
        for index, strategy in enumerate(self._strategies):
            try:
                if await strategy.has(key):
                    return True
            except Exception as e:
                logger.warning(f"Cache layer L{index + 1} failed to check {key}: {e}")
        return False

    async def delete(self, key: str) -> None:
        await self._fan_out("delete", [s.delete(key) for s in self._strategies])

    async def clear(self) -> None:
        await self._fan_out("clear", [s.clear() for s in self._strategies])

    async def _backfill(self, key: str, data: Any, found_at: int) -> None:
        """Copy a value found at layer ``found_at`` into earlier layers.

        Stops at the first earlier layer that already holds the key.
        """
        for index, strategy in enumerate(self._strategies[:found_at]):
            try:
                if await strategy.has(key):
                    break
                await strategy.set(key, data)
            except Exception as e:
                logger.warning(f"Cache layer L{index + 1} failed to backfill {key}: {e}")

    async def _fan_out(self, operation: str, calls: list[Awaitable[None]]) -> None:
        results = await asyncio.gather(*calls, return_exceptions=True)
        for index, result in enumerate(results):
            if isinstance(result, Exception):
                logger.warning(f"Cache layer L{index + 1} failed to {operation}: {result}")

    @property
    def layers(self) -> list[CacheStrategy]:
        """Get the cache layers, L1 first."""
        return list(self._strategies)
