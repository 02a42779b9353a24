from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rti_repository.api.dependencies import HandlerDep, lifespan
from rti_repository.config import settings
from rti_repository.dto import (
    CacheOperationResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    InvalidateCacheRequest,
    RepositoryListResponse,
)

app = FastAPI(
    title="RTI Repository Admin API",
    description="Inspect and manage the RTI dashboard's data-access caches",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "RTI Repository Admin API",
        "version": "0.1.0",
        "description": "Inspect and manage the RTI dashboard's data-access caches",
        "endpoints": {
            "repositories": "/repositories",
            "cache": "/cache",
            "stats": "/cache/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/repositories", response_model=RepositoryListResponse)
async def list_repositories(handler: HandlerDep) -> RepositoryListResponse:
    """List registered repositories and their strategies."""
    return await handler.list_repositories()


@app.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Hit/miss statistics of the default cache."""
    return await handler.get_stats()


@app.delete("/cache", response_model=CacheOperationResponse)
async def clear_cache(handler: HandlerDep) -> CacheOperationResponse:
    """Clear the default cache (every layer)."""
    return await handler.clear_cache()


@app.post("/cache/invalidate", response_model=CacheOperationResponse)
async def invalidate_cache(request: InvalidateCacheRequest, handler: HandlerDep) -> CacheOperationResponse:
    """Delete specific keys from the default cache."""
    return await handler.invalidate(request)


@app.delete("/cache/{key:path}", response_model=CacheOperationResponse)
async def delete_cache_key(key: str, handler: HandlerDep) -> CacheOperationResponse:
    """Delete a single key from the default cache."""
    return await handler.delete_key(key)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rti_repository.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
