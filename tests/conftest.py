"""Shared fixtures for the data-access layer tests."""

from typing import Any

import pytest

from rti_repository.repositories import InMemoryStorage


class FakeClock:
    """Controllable epoch-milliseconds clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FailingCache:
    """Cache layer whose every operation raises."""

    async def get(self, key: str) -> Any | None:
        raise RuntimeError("layer down")

    async def set(self, key: str, data: Any, ttl: int | None = None) -> None:
        raise RuntimeError("layer down")

    async def has(self, key: str) -> bool:
        raise RuntimeError("layer down")

    async def delete(self, key: str) -> None:
        raise RuntimeError("layer down")

    async def clear(self) -> None:
        raise RuntimeError("layer down")


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Create an empty in-memory key-value store."""
    return InMemoryStorage()
