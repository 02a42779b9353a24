"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class RepositoryItem(BaseModel):
    """Single registered repository (in repositories array)."""

    name: str = Field(..., description="Registry name")
    repository_type: str = Field(..., description="Repository class name")
    cache_strategy: str | None = Field(None, description="Cache strategy class name")
    transformation_strategy: str | None = Field(None, description="Transformation strategy class name")


class RepositoryListResponse(BaseModel):
    """Response DTO for listing registered repositories."""

    repositories: list[RepositoryItem] = Field(
        default_factory=list,
        description="Registered repositories, in registration order",
    )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    cache_strategy: str = Field(..., description="Class name of the default cache strategy")
    size: int = Field(..., description="Number of live entries", ge=0)
    hits: int = Field(..., description="Hits since the last clear", ge=0)
    misses: int = Field(..., description="Misses since the last clear", ge=0)
    hit_rate: float = Field(..., description="hits / (hits + misses)", ge=0.0, le=1.0)


class CacheOperationResponse(BaseModel):
    """Response DTO for cache clear/delete/invalidate operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    affected_keys: int = Field(0, description="Number of keys targeted (0 for a full clear)", ge=0)
    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the default cache answers lookups")
    storage_healthy: bool | None = Field(
        None,
        description="Whether the persistent store is reachable (null when not configured)",
    )
