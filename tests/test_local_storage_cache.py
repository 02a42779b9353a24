"""
Tests for the persistent (key-value store backed) cache strategy.
"""

import json
import logging

import pytest

from rti_repository.exceptions import StorageError, StorageQuotaExceededError
from rti_repository.protocols import CacheStrategy, KeyValueStorage
from rti_repository.repositories import InMemoryStorage
from rti_repository.strategies import LocalStorageCacheStrategy


class BrokenReadStorage(InMemoryStorage):
    """Store whose reads always fail."""

    async def get_item(self, key: str) -> str | None:
        raise StorageError("disk on fire", key=key)


@pytest.fixture
def cache(storage, clock):
    """Create a persistent cache over an in-memory store."""
    return LocalStorageCacheStrategy(storage=storage, default_ttl=1000, clock=clock)


def test_satisfies_protocols(cache, storage):
    """Strategy and backend implement their protocols."""
    assert isinstance(cache, CacheStrategy)
    assert isinstance(storage, KeyValueStorage)


@pytest.mark.asyncio
async def test_round_trip(cache):
    """JSON-compatible values survive a write and read."""
    payload = {"id": "RTI-7", "tags": ["health", "water"], "days_pending": 31}
    await cache.set("rti:7", payload)

    assert await cache.get("rti:7") == payload
    assert await cache.has("rti:7") is True


@pytest.mark.asyncio
async def test_envelope_layout_under_default_prefix(cache, storage, clock):
    """Entries are stored as {data, timestamp, ttl} under 'cache:<key>'."""
    await cache.set("a", [1, 2], ttl=500)

    raw = await storage.get_item("cache:a")
    assert json.loads(raw) == {"data": [1, 2], "timestamp": clock.now, "ttl": 500}


@pytest.mark.asyncio
async def test_default_ttl_is_one_day(storage):
    """Without a configured TTL, entries live 24 hours."""
    cache = LocalStorageCacheStrategy(storage=storage)
    await cache.set("a", 1)

    envelope = json.loads(await storage.get_item("cache:a"))
    assert envelope["ttl"] == 24 * 60 * 60 * 1000


@pytest.mark.asyncio
async def test_custom_prefix(storage, clock):
    """A custom prefix namespaces the stored keys."""
    cache = LocalStorageCacheStrategy(storage=storage, prefix="rti:", clock=clock)
    await cache.set("a", 1)

    assert await storage.keys() == ["rti:a"]
    assert cache.prefix == "rti:"


@pytest.mark.asyncio
async def test_expired_entry_is_removed(cache, storage, clock):
    """Reading an expired entry returns None and deletes it from the store."""
    await cache.set("a", 1)
    clock.advance(1001)

    assert await cache.get("a") is None
    assert await storage.get_item("cache:a") is None


@pytest.mark.asyncio
async def test_corrupt_envelope_is_a_miss(cache, storage, caplog):
    """Unparseable data fails open and is logged."""
    await storage.set_item("cache:bad", "{not json")

    with caplog.at_level(logging.ERROR):
        assert await cache.get("bad") is None

    assert "cache:bad" in caplog.text


@pytest.mark.asyncio
async def test_envelope_missing_fields_is_a_miss(cache, storage):
    """A JSON value without the envelope fields is treated as absent."""
    await storage.set_item("cache:odd", json.dumps({"data": 1}))

    assert await cache.get("odd") is None


@pytest.mark.asyncio
async def test_read_error_is_a_miss(clock):
    """Storage read failures never reach the caller."""
    cache = LocalStorageCacheStrategy(storage=BrokenReadStorage(), clock=clock)

    assert await cache.get("a") is None
    assert await cache.has("a") is False


@pytest.mark.asyncio
async def test_unserializable_value_is_logged_not_raised(cache, storage, caplog):
    """Write failures other than quota are logged and swallowed."""
    with caplog.at_level(logging.ERROR):
        await cache.set("a", object())

    assert await storage.keys() == []
    assert "cache:a" in caplog.text


@pytest.mark.asyncio
async def test_quota_exceeded_clears_own_namespace(clock, caplog):
    """A full store wipes every entry under the prefix, and only those."""
    storage = InMemoryStorage(quota=200)
    await storage.set_item("session", "keep-me")
    cache = LocalStorageCacheStrategy(storage=storage, clock=clock)
    await cache.set("a", 1)
    await cache.set("b", 2)

    with caplog.at_level(logging.WARNING):
        await cache.set("huge", "x" * 500)

    assert await storage.keys() == ["session"]
    assert await cache.get("a") is None
    assert "quota exceeded" in caplog.text.lower()


class FullUnlistableStorage(InMemoryStorage):
    """Store that is full and cannot enumerate its keys."""

    async def set_item(self, key: str, value: str) -> None:
        raise StorageQuotaExceededError("store full", key=key)

    async def keys(self, prefix: str = "") -> list[str]:
        raise StorageError("scan failed")


@pytest.mark.asyncio
async def test_failed_quota_recovery_is_logged_not_raised(clock, caplog):
    """A store that fails during the quota wipe never fails set()."""
    cache = LocalStorageCacheStrategy(storage=FullUnlistableStorage(), clock=clock)

    with caplog.at_level(logging.ERROR):
        await cache.set("a", 1)

    assert "scan failed" in caplog.text


@pytest.mark.asyncio
async def test_clear_only_touches_prefixed_keys(cache, storage):
    """clear() never removes keys outside its namespace."""
    await storage.set_item("other:a", "1")
    await storage.set_item("cachex", "2")
    await cache.set("a", 1)
    await cache.set("b", 2)

    await cache.clear()

    assert sorted(await storage.keys()) == ["cachex", "other:a"]


@pytest.mark.asyncio
async def test_delete(cache, storage):
    """delete() removes the prefixed key."""
    await cache.set("a", 1)
    await cache.delete("a")

    assert await storage.get_item("cache:a") is None


@pytest.mark.asyncio
async def test_without_storage_everything_is_noop():
    """With no backend the strategy is safe to call and always misses."""
    cache = LocalStorageCacheStrategy()

    await cache.set("a", 1)
    assert await cache.get("a") is None
    assert await cache.has("a") is False
    await cache.delete("a")
    await cache.clear()
    assert cache.enabled is False
