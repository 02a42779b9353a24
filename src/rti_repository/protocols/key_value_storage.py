"""Persistent key-value storage protocol.

The persistent cache strategy talks to its backing store only through
this interface, so the store can be Redis, an in-process dict for tests,
or anything else that holds string values under string keys.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorage(Protocol):
    """Protocol for string key-value stores.

    Backends raise StorageQuotaExceededError when a write is rejected
    because the store is full, and StorageError for other failures.
    """

    async def get_item(self, key: str) -> str | None:
        """Read a value, or None if the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Write a value, replacing any existing one."""
        ...

    async def remove_item(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...

    async def keys(self, prefix: str = "") -> list[str]:
        """List stored keys.

        Args:
            prefix: Backends may use this to narrow the scan. Callers must
                still filter the result themselves.
        """
        ...
