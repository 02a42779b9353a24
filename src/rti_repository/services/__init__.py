"""Service layer: composition of caches, pipelines and repositories.

Architecture:
    Handler -> RepositoryFactory -> Repository -> CacheStrategy / Transformation
    (HTTP)  -> (Composition)     -> (Data Access)

Usage:
    ```python
    from rti_repository.services import RepositoryFactory

    # Using factory method (recommended)
    factory = RepositoryFactory.create()

    # Or with an explicit default config
    factory = RepositoryFactory(default_config=config)
    ```
"""

from .repository_factory import (
    RepositoryConfigBuilder,
    RepositoryFactory,
    default_repository_config,
)
from .transformation_factory import TransformationStrategyFactory

__all__ = [
    "RepositoryFactory",
    "RepositoryConfigBuilder",
    "TransformationStrategyFactory",
    "default_repository_config",
]
