"""In-process implementation of KeyValueStorage."""

from rti_repository.exceptions import StorageQuotaExceededError


class InMemoryStorage:
    """Dict-backed string store with an optional size quota.

    Behaves like a browser's localStorage: values are strings, and a write
    that would push the total size (keys plus values, in characters) past
    ``quota`` is rejected with StorageQuotaExceededError. Useful for local
    development and tests.
    """

    def __init__(self, quota: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota = quota

    def _size_with(self, key: str, value: str) -> int:
        size = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
        return size + len(key) + len(value)

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self._quota is not None and self._size_with(key, value) > self._quota:
            raise StorageQuotaExceededError(f"Storage quota of {self._quota} exceeded", key=key)
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._items if key.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._items)
