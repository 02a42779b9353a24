"""Repository factory and configuration builder.

The factory is the composition root for data access: it decides which
cache strategy and which transformation pipeline each repository uses,
and keeps a registry of the repositories it has handed out.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any, TypeVar

from rti_repository.config import settings
from rti_repository.entities import RepositoryConfig
from rti_repository.protocols import CacheStrategy, DataTransformationStrategy
from rti_repository.strategies import IdentityTransformationStrategy, MemoryCacheStrategy

logger = logging.getLogger(__name__)

RepositoryT = TypeVar("RepositoryT")


def default_repository_config() -> RepositoryConfig:
    """Baseline configuration: 5-minute memory cache, identity pipeline, 3 retries."""
    return RepositoryConfig(
        cache_strategy=MemoryCacheStrategy(default_ttl=settings.cache_default_ttl, max_size=settings.max_size),
        transformation_strategy=IdentityTransformationStrategy(),
        enable_retry=settings.enable_retry,
        retry_attempts=settings.retry_attempts,
        base_url=settings.api_base_url,
        default_headers={"Content-Type": "application/json"},
    )


class RepositoryFactory:
    """Registry of named repositories sharing a default configuration.

    Create one at application start and pass it to whatever needs
    repositories (the API stores it in ``app.state``). There is no global
    instance.

    Example:
        ```python
        factory = RepositoryFactory.create()

        # Repository with defaults
        rtis = factory.create_repository("rtis", ApiRepository)

        # Repository with a persistent cache
        stats = factory.create_repository(
            "stats",
            ApiRepository,
            cache_strategy=LocalStorageCacheStrategy.create(prefix="stats:"),
        )
        ```
    """

    def __init__(self, default_config: RepositoryConfig | None = None) -> None:
        """Initialize the factory.

        Args:
            default_config: Configuration every repository starts from.
                Defaults to default_repository_config().
        """
        self._default_config = default_config or default_repository_config()
        self._repositories: dict[str, Any] = {}

    @classmethod
    def create(cls, cache_strategy: CacheStrategy | None = None) -> "RepositoryFactory":
        """Factory method to create a RepositoryFactory from settings.

        Args:
            cache_strategy: Default cache for all repositories. If None, uses
                a memory cache from settings.

        Returns:
            Configured RepositoryFactory
        """
        config = default_repository_config()
        if cache_strategy is not None:
            config = replace(config, cache_strategy=cache_strategy)
        return cls(default_config=config)

    def set_default_config(self, **overrides: Any) -> None:
        """Merge overrides into the default configuration.

        Raises:
            TypeError: If an override names an unknown config field
        """
        self._default_config = replace(self._default_config, **overrides)

    def get_default_config(self) -> RepositoryConfig:
        """Get the default configuration."""
        return self._default_config

    def get_merged_config(self, **overrides: Any) -> RepositoryConfig:
        """Defaults with ``overrides`` applied on top.

        The merge is shallow: passing ``default_headers`` replaces the whole
        header mapping. Use the builder's with_headers/add_header to merge
        individual headers.

        Raises:
            TypeError: If an override names an unknown config field
        """
        return replace(self._default_config, **overrides)

    def config_builder(self) -> "RepositoryConfigBuilder":
        """Start a fluent builder from the default configuration.

        Example:
            ```python
            config = (
                factory.config_builder()
                .with_cache(MemoryCacheStrategy())
                .with_transformation(RTISummaryStrategy())
                .with_retry(True, 5)
                .build()
            )
            ```
        """
        return RepositoryConfigBuilder(self._default_config)

    def create_repository(
        self,
        name: str,
        repository_cls: Callable[[RepositoryConfig], RepositoryT],
        **overrides: Any,
    ) -> RepositoryT:
        """Build a repository from the merged config and register it under ``name``.

        Args:
            name: Registry key
            repository_cls: Callable taking a RepositoryConfig (usually a BaseRepository subclass)
            **overrides: Config fields to override

        Returns:
            The new repository
        """
        repository = repository_cls(self.get_merged_config(**overrides))
        self.register(name, repository)
        return repository

    def register(self, name: str, repository: Any) -> None:
        """Register a repository instance, replacing any with the same name."""
        if name in self._repositories:
            logger.info(f"Replacing registered repository: {name}")
        self._repositories[name] = repository

    def get(self, name: str) -> Any | None:
        """Get a registered repository, or None."""
        return self._repositories.get(name)

    def has(self, name: str) -> bool:
        return name in self._repositories

    def unregister(self, name: str) -> None:
        self._repositories.pop(name, None)

    def clear(self) -> None:
        """Forget every registered repository."""
        self._repositories.clear()

    @property
    def names(self) -> list[str]:
        """Names of the registered repositories, in registration order."""
        return list(self._repositories)


class RepositoryConfigBuilder:
    """Fluent builder for RepositoryConfig.

    Each ``with_*`` call derives a new immutable config and returns the
    builder for chaining; ``build()`` returns the current snapshot, which
    later builder calls do not affect.
    """

    def __init__(self, base_config: RepositoryConfig) -> None:
        self._config = base_config

    def with_cache(self, strategy: CacheStrategy) -> "RepositoryConfigBuilder":
        self._config = replace(self._config, cache_strategy=strategy)
        return self

    def with_transformation(self, strategy: DataTransformationStrategy) -> "RepositoryConfigBuilder":
        self._config = replace(self._config, transformation_strategy=strategy)
        return self

    def with_retry(self, enabled: bool, attempts: int | None = None) -> "RepositoryConfigBuilder":
        """Enable or disable retry, optionally changing the attempt count."""
        if attempts is None:
            self._config = replace(self._config, enable_retry=enabled)
        else:
            self._config = replace(self._config, enable_retry=enabled, retry_attempts=attempts)
        return self

    def with_base_url(self, url: str) -> "RepositoryConfigBuilder":
        self._config = replace(self._config, base_url=url)
        return self

    def with_headers(self, headers: Mapping[str, str]) -> "RepositoryConfigBuilder":
        """Merge headers into the current ones (new values win)."""
        merged = {**self._config.default_headers, **headers}
        self._config = replace(self._config, default_headers=merged)
        return self

    def add_header(self, key: str, value: str) -> "RepositoryConfigBuilder":
        return self.with_headers({key: value})

    def build(self) -> RepositoryConfig:
        return self._config
