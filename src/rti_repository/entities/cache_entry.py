"""Cache entry domain entities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its write time and time-to-live.

    Entries are never mutated; writing a key always replaces the entry.

    Attributes:
        data: The cached value
        timestamp: When the entry was written (epoch milliseconds)
        ttl: Time-to-live in milliseconds
    """

    data: Any
    timestamp: int
    ttl: int

    def is_expired(self, now: int) -> bool:
        """Check whether the entry is stale at ``now`` (epoch milliseconds)."""
        return now - self.timestamp > self.ttl


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of a cache's counters.

    Attributes:
        size: Number of entries currently held
        hits: Lookups answered from the cache since the last clear
        misses: Lookups that found nothing (or an expired entry)
    """

    size: int
    hits: int
    misses: int

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups that were hits."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, int | float]:
        """Convert stats to dictionary."""
        return {
            "size": self.size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
        }
