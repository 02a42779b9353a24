"""Domain entities for internal representation.

These are pure dataclasses (frozen) used by strategies, repositories
and the factory. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry, CacheStats
from .repository_config import RepositoryConfig

__all__ = ["CacheEntry", "CacheStats", "RepositoryConfig"]
