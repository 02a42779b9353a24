"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class InvalidateCacheRequest(BaseModel):
    """Request DTO for invalidating specific cache keys."""

    keys: list[str] = Field(
        ...,
        description="Cache keys to delete from the default cache",
        min_length=1,
    )
