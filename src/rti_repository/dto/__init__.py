"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract of the admin API.
They are used for request/response validation and serialization.

Internal logic should use entities from the entities package.
"""

from .requests import InvalidateCacheRequest
from .responses import (
    CacheOperationResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    RepositoryItem,
    RepositoryListResponse,
)

__all__ = [
    "InvalidateCacheRequest",
    "RepositoryItem",
    "RepositoryListResponse",
    "CacheStatsResponse",
    "CacheOperationResponse",
    "HealthCheckResponse",
]
