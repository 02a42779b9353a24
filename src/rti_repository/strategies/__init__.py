"""Cache and transformation strategies.

Cache strategies (all satisfy the CacheStrategy protocol):
    - MemoryCacheStrategy: process-local, optional max size
    - LocalStorageCacheStrategy: persistent key-value store
    - NoOpCacheStrategy: caching disabled
    - CompositeCacheStrategy: L1 -> Ln with backfill

Transformation strategies (all satisfy DataTransformationStrategy):
    - IdentityTransformationStrategy
    - ComposedTransformationStrategy
    - ArrayTransformationStrategy
    - FilteringTransformationStrategy
    - ConditionalTransformationStrategy
    - MemoizedTransformationStrategy
"""

from .composite_cache import CompositeCacheStrategy
from .local_storage_cache import LocalStorageCacheStrategy
from .memory_cache import MemoryCacheStrategy
from .noop_cache import NoOpCacheStrategy
from .transformations import (
    ArrayTransformationStrategy,
    ComposedTransformationStrategy,
    ConditionalTransformationStrategy,
    FilteringTransformationStrategy,
    IdentityTransformationStrategy,
    MemoizedTransformationStrategy,
    structural_key,
)

__all__ = [
    # Cache strategies
    "MemoryCacheStrategy",
    "LocalStorageCacheStrategy",
    "NoOpCacheStrategy",
    "CompositeCacheStrategy",
    # Transformation strategies
    "IdentityTransformationStrategy",
    "ComposedTransformationStrategy",
    "ArrayTransformationStrategy",
    "FilteringTransformationStrategy",
    "ConditionalTransformationStrategy",
    "MemoizedTransformationStrategy",
    "structural_key",
]
