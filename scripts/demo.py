#!/usr/bin/env python3
"""
Demo script for the RTI repository layer.

This script walks through layered caching and the transformation pipeline
with a handful of sample RTI requests. It runs without Redis or an API
server: the persistent layer uses the in-process store and the "API" is a
simulated slow fetch.
"""

import asyncio
import time

from rti_repository import (
    BaseRepository,
    CompositeCacheStrategy,
    ComposedTransformationStrategy,
    FilteringTransformationStrategy,
    InMemoryStorage,
    LocalStorageCacheStrategy,
    MemoizedTransformationStrategy,
    MemoryCacheStrategy,
    RepositoryError,
    RepositoryFactory,
)

SAMPLE_RTIS = [
    {"id": "RTI-101", "department": "Water Supply", "status": "answered", "days_pending": 12},
    {"id": "RTI-102", "department": "Public Works", "status": "pending", "days_pending": 41},
    {"id": "RTI-103", "department": "Health", "status": "answered", "days_pending": 27},
    {"id": "RTI-104", "department": "Education", "status": "rejected", "days_pending": 5},
]


class RTISummaryStrategy:
    """Raw RTI record to dashboard row."""

    def transform(self, data: dict) -> dict:
        return {
            "id": data["id"],
            "title": f"{data['department']} - {data['status']}",
            "overdue": data["days_pending"] > 30,
        }

    def validate(self, data) -> bool:
        return isinstance(data, dict) and "id" in data and "department" in data


class SortByIdStrategy:
    def transform(self, data: list) -> list:
        return sorted(data, key=lambda row: row["id"])


class RTIRepository(BaseRepository):
    repository_name = "RTIRepository"

    async def list_requests(self, use_cache: bool = True) -> list[dict]:
        return await self.get_or_fetch("requests", self._fetch_requests, use_cache=use_cache)

    async def _fetch_requests(self) -> list[dict]:
        await asyncio.sleep(0.3)  # simulated network latency
        return SAMPLE_RTIS


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_layered_cache() -> None:
    """Demonstrate memory over persistent caching with backfill."""
    print_section("Layered Cache (memory over persistent store)")

    storage = InMemoryStorage()
    memory = MemoryCacheStrategy(default_ttl=60_000)
    persistent = LocalStorageCacheStrategy(storage=storage, prefix="rti:")
    cache = CompositeCacheStrategy([memory, persistent])

    await cache.set("stats:2024", {"filed": 1204, "answered": 876})
    print(f"\n📝 Stored one entry; persistent keys: {await storage.keys()}")

    await memory.clear()
    print("🧹 Cleared the memory layer (simulates a process restart)")

    value = await cache.get("stats:2024")
    print(f"🔍 Read through composite: {value}")
    print(f"  ✓ Backfilled into memory: {await memory.has('stats:2024')}")


async def demo_repository_pipeline() -> None:
    """Demonstrate cache-first reads through a transformation pipeline."""
    print_section("Repository Pipeline")

    factory = RepositoryFactory.create()
    pipeline = ComposedTransformationStrategy([
        FilteringTransformationStrategy(lambda rti: rti["status"] != "rejected", RTISummaryStrategy()),
        SortByIdStrategy(),
    ])
    rtis = factory.create_repository("rtis", RTIRepository, transformation_strategy=pipeline)

    for attempt in ("cold", "warm"):
        start = time.time()
        rows = await rtis.list_requests()
        duration = (time.time() - start) * 1000
        print(f"\n  {attempt.upper()} read: {len(rows)} rows in {duration:.1f}ms")

    print("\n📋 Dashboard rows:")
    for row in rows:
        flag = "⚠ overdue" if row["overdue"] else ""
        print(f"  {row['id']}  {row['title']:<30} {flag}")

    stats = await factory.get_default_config().cache_strategy.get_stats()
    print(f"\n📊 Cache: {stats.hits} hit(s), {stats.misses} miss(es), hit rate {stats.hit_rate:.0%}")


def demo_memoization() -> None:
    """Demonstrate memoized transformations."""
    print_section("Memoized Transformation")

    summary = MemoizedTransformationStrategy(RTISummaryStrategy())
    record = SAMPLE_RTIS[1]

    summary.transform(record)
    summary.transform(dict(reversed(list(record.items()))))
    print("\n  Transformed the same record twice (different key order)")
    print(f"  Memo entries: {summary.cache_size}")


async def demo_error_handling() -> None:
    """Demonstrate retry and error wrapping."""
    print_section("Retry and Error Handling")

    class FlakyRepository(RTIRepository):
        retry_backoff = 0.05
        calls = 0

        async def _fetch_requests(self) -> list[dict]:
            self.calls += 1
            raise ConnectionError("network unreachable")

    factory = RepositoryFactory.create()
    flaky = factory.create_repository("flaky", FlakyRepository)

    try:
        await flaky.list_requests(use_cache=False)
    except RepositoryError as e:
        print(f"\n  ✗ {e.message} after {flaky.calls} attempt(s)")
        print(f"  Cause: {e.original_error!r}")
        print(f"  Network error: {BaseRepository.is_network_error(e.original_error)}")


async def main() -> None:
    """Run all demos."""
    print("\n🚀 RTI Repository Demo")
    print("=" * 70)
    print("This demo showcases layered caching and transformation pipelines")

    await demo_layered_cache()
    await demo_repository_pipeline()
    demo_memoization()
    await demo_error_handling()

    print("\n" + "=" * 70)
    print("✅ Demo completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    asyncio.run(main())
