"""Persistent cache strategy over a key-value store.

Entries are stored as JSON envelopes ``{"data", "timestamp", "ttl"}`` under
``<prefix><key>`` so the cache can share a store with unrelated data.
The strategy fails open: read errors and corrupt envelopes become misses,
and a full store triggers a wipe of this strategy's namespace.
"""

import json
import logging
from typing import Any

from rti_repository.config import settings
from rti_repository.entities import CacheEntry
from rti_repository.exceptions import StorageQuotaExceededError
from rti_repository.protocols import KeyValueStorage
from rti_repository.repositories import RedisStorage
from rti_repository.utils import Clock, now_ms

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "cache:"
DEFAULT_TTL = 24 * 60 * 60 * 1000  # 24 hours


class LocalStorageCacheStrategy:
    """Cache strategy backed by a persistent KeyValueStorage.

    This class satisfies the CacheStrategy protocol through structural
    typing. Without a storage backend (e.g. in a headless or server-side
    context) every operation is a no-op, so shared code paths can call
    it unconditionally.

    Example:
        ```python
        cache = LocalStorageCacheStrategy(storage=RedisStorage.create(), prefix="rti:")
        await cache.set("settings", user_settings)

        # Or with defaults from settings
        cache = LocalStorageCacheStrategy.create()
        ```
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        prefix: str | None = None,
        default_ttl: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the persistent cache.

        Args:
            storage: Backing store. None disables the strategy.
            prefix: Namespace prepended to every key. Defaults to "cache:".
            default_ttl: TTL in milliseconds for writes without one. Defaults to 24 hours.
            clock: Source of epoch milliseconds. Defaults to wall-clock time.
        """
        self._storage = storage
        self._prefix = prefix if prefix is not None else DEFAULT_PREFIX
        self._default_ttl = default_ttl if default_ttl is not None else DEFAULT_TTL
        self._clock = clock or now_ms

    @classmethod
    def create(
        cls,
        storage: KeyValueStorage | None = None,
        prefix: str | None = None,
        default_ttl: int | None = None,
    ) -> "LocalStorageCacheStrategy":
        """Factory method to create a Redis-backed strategy with defaults.

        Args:
            storage: Backing store. If None, uses RedisStorage from settings.
            prefix: Key prefix. If None, uses settings.
            default_ttl: TTL in milliseconds. If None, uses settings.

        Returns:
            Configured LocalStorageCacheStrategy
        """
        if storage is None:
            storage = RedisStorage.create()

        return cls(
            storage=storage,
            prefix=prefix if prefix is not None else settings.storage_prefix,
            default_ttl=default_ttl if default_ttl is not None else settings.storage_default_ttl,
        )

    def _storage_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Any | None:
        if self._storage is None:
            return None

        storage_key = self._storage_key(key)
        try:
            item = await self._storage.get_item(storage_key)
            if item is None:
                return None

            raw = json.loads(item)
            entry = CacheEntry(data=raw["data"], timestamp=int(raw["timestamp"]), ttl=int(raw["ttl"]))

            if entry.is_expired(self._clock()):
                await self._storage.remove_item(storage_key)
                return None

            return entry.data

        except Exception as e:
            logger.error(f"Failed to read cache entry {storage_key}: {e}")
            return None

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        if self._storage is None:
            return

        storage_key = self._storage_key(key)
        try:
            envelope = {
                "data": data,
                "timestamp": self._clock(),
                "ttl": ttl if ttl is not None else self._default_ttl,
            }
            await self._storage.set_item(storage_key, json.dumps(envelope))

        except StorageQuotaExceededError as e:
            logger.warning(f"Storage quota exceeded writing {storage_key}, clearing '{self._prefix}' entries: {e}")
            try:
                await self.clear()
            except Exception as clear_error:
                logger.error(f"Failed to clear '{self._prefix}' entries after quota error: {clear_error}")

        except Exception as e:
            logger.error(f"Failed to write cache entry {storage_key}: {e}")

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def delete(self, key: str) -> None:
        if self._storage is None:
            return

        await self._storage.remove_item(self._storage_key(key))

    async def clear(self) -> None:
        """Remove every key under this strategy's prefix, and nothing else."""
        if self._storage is None:
            return

        keys = await self._storage.keys(self._prefix)
        for storage_key in keys:
            if storage_key.startswith(self._prefix):
                await self._storage.remove_item(storage_key)

    @property
    def prefix(self) -> str:
        """Get the key namespace."""
        return self._prefix

    @property
    def enabled(self) -> bool:
        """Whether a storage backend is attached."""
        return self._storage is not None
