"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping cache layers (memory, persistent, no-op, composite)
- Plugging any transformation into a repository pipeline
- Unit testing with in-memory implementations

Usage:
    ```python
    from rti_repository.protocols import CacheStrategy, DataTransformationStrategy

    cache: CacheStrategy = MemoryCacheStrategy()
    pipeline: DataTransformationStrategy = ComposedTransformationStrategy([...])
    ```
"""

from .cache_strategy import CacheStrategy, StatsReportingCache
from .key_value_storage import KeyValueStorage
from .transformation import (
    DataTransformationStrategy,
    ValidatingTransformationStrategy,
    validate_input,
)

__all__ = [
    "CacheStrategy",
    "StatsReportingCache",
    "KeyValueStorage",
    "DataTransformationStrategy",
    "ValidatingTransformationStrategy",
    "validate_input",
]
