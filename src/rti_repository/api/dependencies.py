"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - RepositoryFactory and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from rti_repository.config import configure_logging, settings
from rti_repository.handlers import CacheHandler
from rti_repository.protocols import CacheStrategy
from rti_repository.repositories import RedisStorage
from rti_repository.services import RepositoryFactory
from rti_repository.strategies import (
    CompositeCacheStrategy,
    LocalStorageCacheStrategy,
    MemoryCacheStrategy,
)

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def build_default_cache(storage: RedisStorage | None) -> CacheStrategy:
    """Memory cache, layered over the persistent store when one is configured."""
    memory = MemoryCacheStrategy(default_ttl=settings.cache_default_ttl, max_size=settings.max_size)
    if storage is None:
        return memory

    persistent = LocalStorageCacheStrategy.create(storage=storage)
    return CompositeCacheStrategy([memory, persistent])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes and stores in app.state:
    1. Persistent storage (Redis) when PERSISTENT_CACHE_ENABLED is set
    2. RepositoryFactory with the default cache - app.state.repository_factory
    3. Handler (HTTP endpoints) - app.state.cache_handler

    Cleanup:
        Closes registered repositories and storage, removes state on shutdown
    """
    configure_logging()

    storage = RedisStorage.create() if settings.persistent_cache_enabled else None
    if storage is not None and not await storage.ping():
        logger.warning(f"Redis at {settings.redis_url} is not reachable; persistent cache will miss")

    factory = RepositoryFactory.create(cache_strategy=build_default_cache(storage))
    app.state.repository_factory = factory
    app.state.cache_handler = CacheHandler(factory=factory, storage=storage)
    app.state.storage = storage

    logger.info(f"Repository factory initialized (base URL: {settings.api_base_url})")
    logger.info(f"Default cache: {type(factory.get_default_config().cache_strategy).__name__}")

    yield

    for name in factory.names:
        close = getattr(factory.get(name), "close", None)
        if close is not None:
            await close()
    factory.clear()
    if storage is not None:
        await storage.close()

    del app.state.cache_handler
    del app.state.repository_factory
    del app.state.storage
    logger.info("Repository factory shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
