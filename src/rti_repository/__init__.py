"""RTI Repository - data-access layer for the RTI transparency dashboard.

This package provides layered caching and a composable transformation
pipeline behind a repository factory:

Layers:
    - protocols: Interface contracts (CacheStrategy, DataTransformationStrategy, KeyValueStorage)
    - strategies: Cache layers and transformation strategies
    - repositories: Storage backends and data repositories
    - services: RepositoryFactory (composition root) and builders
    - handlers: HTTP endpoint handlers for the admin API
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from rti_repository.services import RepositoryFactory
    from rti_repository.repositories import ApiRepository

    factory = RepositoryFactory.create()
    rtis = factory.create_repository("rtis", ApiRepository)
    requests = await rtis.get_resource("/rti-requests")
    ```

For the admin HTTP API:
    ```python
    from rti_repository.api.app import app
    ```
"""

from rti_repository.config import get_settings, settings
from rti_repository.entities import CacheEntry, CacheStats, RepositoryConfig
from rti_repository.exceptions import RepositoryError, StorageError, StorageQuotaExceededError
from rti_repository.protocols import (
    CacheStrategy,
    DataTransformationStrategy,
    KeyValueStorage,
    StatsReportingCache,
    validate_input,
)
from rti_repository.repositories import ApiRepository, BaseRepository, InMemoryStorage, RedisStorage
from rti_repository.services import (
    RepositoryConfigBuilder,
    RepositoryFactory,
    TransformationStrategyFactory,
)
from rti_repository.strategies import (
    ArrayTransformationStrategy,
    ComposedTransformationStrategy,
    CompositeCacheStrategy,
    ConditionalTransformationStrategy,
    FilteringTransformationStrategy,
    IdentityTransformationStrategy,
    LocalStorageCacheStrategy,
    MemoizedTransformationStrategy,
    MemoryCacheStrategy,
    NoOpCacheStrategy,
)

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CacheStrategy",
    "StatsReportingCache",
    "DataTransformationStrategy",
    "KeyValueStorage",
    "validate_input",
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
    # Services (composition)
    "RepositoryFactory",
    "RepositoryConfigBuilder",
    "TransformationStrategyFactory",
    # Repositories (data access)
    "BaseRepository",
    "ApiRepository",
    "RedisStorage",
    "InMemoryStorage",
    # Entities (domain models)
    "CacheEntry",
    "CacheStats",
    "RepositoryConfig",
    # Errors
    "RepositoryError",
    "StorageError",
    "StorageQuotaExceededError",
]
