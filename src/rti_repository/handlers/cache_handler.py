"""HTTP handlers for cache and repository administration.

Handlers convert between DTOs (API contracts) and factory/cache calls.
They handle HTTP concerns like status codes and error responses.
"""

import logging

from fastapi import HTTPException, status

from rti_repository.dto import (
    CacheOperationResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    InvalidateCacheRequest,
    RepositoryItem,
    RepositoryListResponse,
)
from rti_repository.protocols import CacheStrategy, StatsReportingCache
from rti_repository.repositories import BaseRepository, RedisStorage
from rti_repository.services import RepositoryFactory

logger = logging.getLogger(__name__)

HEALTH_PROBE_KEY = "__health__"


class CacheHandler:
    """HTTP handlers for the default cache and the repository registry.

    Operations target the factory's default cache strategy, which every
    repository built with default settings shares.

    Example:
        ```python
        factory = RepositoryFactory.create()
        handler = CacheHandler(factory=factory)

        @app.get("/cache/stats", response_model=CacheStatsResponse)
        async def cache_stats():
            return await handler.get_stats()
        ```
    """

    def __init__(self, factory: RepositoryFactory, storage: RedisStorage | None = None) -> None:
        """Initialize the cache handler.

        Args:
            factory: The repository factory (required).
            storage: Persistent store behind the default cache, if any.
        """
        self._factory = factory
        self._storage = storage

    @property
    def _cache(self) -> CacheStrategy:
        return self._factory.get_default_config().cache_strategy

    async def list_repositories(self) -> RepositoryListResponse:
        """Handle GET /repositories requests."""
        items = []
        for name in self._factory.names:
            repository = self._factory.get(name)
            cache_name = transformation_name = None
            if isinstance(repository, BaseRepository):
                cache_name = type(repository.config.cache_strategy).__name__
                transformation_name = type(repository.config.transformation_strategy).__name__

            items.append(
                RepositoryItem(
                    name=name,
                    repository_type=type(repository).__name__,
                    cache_strategy=cache_name,
                    transformation_strategy=transformation_name,
                )
            )

        return RepositoryListResponse(repositories=items)

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests.

        Raises:
            HTTPException: 404 if the default cache keeps no statistics
        """
        cache = self._cache
        if not isinstance(cache, StatsReportingCache):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{type(cache).__name__} does not report statistics",
            )

        stats = await cache.get_stats()
        return CacheStatsResponse(cache_strategy=type(cache).__name__, **stats.to_dict())

    async def clear_cache(self) -> CacheOperationResponse:
        """Handle DELETE /cache requests."""
        try:
            await self._cache.clear()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        logger.info("Default cache cleared")
        return CacheOperationResponse(success=True, message="Cache cleared successfully")

    async def delete_key(self, key: str) -> CacheOperationResponse:
        """Handle DELETE /cache/{key} requests."""
        return await self.invalidate(InvalidateCacheRequest(keys=[key]))

    async def invalidate(self, request: InvalidateCacheRequest) -> CacheOperationResponse:
        """Handle POST /cache/invalidate requests."""
        try:
            for key in request.keys:
                await self._cache.delete(key)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to invalidate cache keys: {e}",
            ) from e

        return CacheOperationResponse(
            success=True,
            affected_keys=len(request.keys),
            message=f"Invalidated {len(request.keys)} key(s)",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        try:
            await self._cache.has(HEALTH_PROBE_KEY)
            cache_healthy = True
        except Exception as e:
            logger.error(f"Cache health probe failed: {e}")
            cache_healthy = False

        storage_healthy = await self._storage.ping() if self._storage is not None else None
        is_healthy = cache_healthy and storage_healthy is not False

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=cache_healthy,
            storage_healthy=storage_healthy,
        )
