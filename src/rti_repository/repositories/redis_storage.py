"""Redis implementation of KeyValueStorage.

Backs LocalStorageCacheStrategy with a shared Redis instance so cached
view-models survive process restarts. It satisfies the KeyValueStorage
protocol.
"""

import re

import redis.asyncio as redis
from redis.exceptions import RedisError, ResponseError

from rti_repository.config import get_redis_client
from rti_repository.exceptions import StorageError, StorageQuotaExceededError

# Redis glob metacharacters
_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


def _escape_glob(prefix: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", prefix)


class RedisStorage:
    """Redis string store.

    This class satisfies the KeyValueStorage protocol through structural
    typing - no explicit inheritance needed.

    Redis rejects writes with an ``OOM`` error once ``maxmemory`` is reached
    under a ``noeviction`` policy; that rejection is reported as
    StorageQuotaExceededError so callers can recover the same way they
    would from a full browser store.
    """

    def __init__(self, redis_client: redis.Redis | None = None, scan_count: int = 100) -> None:
        """Initialize the Redis storage.

        Args:
            redis_client: asyncio Redis client (decode_responses=True). If None, creates default.
            scan_count: Hint for keys returned per SCAN round trip.
        """
        self._client = redis_client or get_redis_client()
        self._scan_count = scan_count

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisStorage":
        """Factory method to create RedisStorage with defaults.

        Args:
            redis_client: Redis client. If None, uses settings.

        Returns:
            Configured RedisStorage
        """
        return cls(redis_client=redis_client)

    async def get_item(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise StorageError(f"Redis read failed: {e}", key=key) from e

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self._client.set(key, value)
        except ResponseError as e:
            if str(e).startswith("OOM"):
                raise StorageQuotaExceededError(f"Redis out of memory: {e}", key=key) from e
            raise StorageError(f"Redis write failed: {e}", key=key) from e
        except RedisError as e:
            raise StorageError(f"Redis write failed: {e}", key=key) from e

    async def remove_item(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            raise StorageError(f"Redis delete failed: {e}", key=key) from e

    async def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with ``prefix`` using cursor-based SCAN."""
        pattern = f"{_escape_glob(prefix)}*"
        try:
            return [key async for key in self._client.scan_iter(match=pattern, count=self._scan_count)]
        except RedisError as e:
            raise StorageError(f"Redis scan failed: {e}") from e

    async def ping(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
