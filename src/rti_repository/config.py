import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Repositories
    api_base_url: str = os.getenv("API_BASE_URL", "http://localhost:8000/api")
    enable_retry: bool = os.getenv("ENABLE_RETRY", "true").lower() == "true"
    retry_attempts: int = int(os.getenv("RETRY_ATTEMPTS", "3"))
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30.0"))

    # In-memory cache (milliseconds)
    cache_default_ttl: int = int(os.getenv("CACHE_DEFAULT_TTL_MS", str(5 * 60 * 1000)))  # 5 minutes
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", "0"))  # 0 = unbounded

    # Persistent cache (milliseconds)
    persistent_cache_enabled: bool = os.getenv("PERSISTENT_CACHE_ENABLED", "false").lower() == "true"
    storage_prefix: str = os.getenv("STORAGE_PREFIX", "cache:")
    storage_default_ttl: int = int(os.getenv("STORAGE_DEFAULT_TTL_MS", str(24 * 60 * 60 * 1000)))  # 24 hours

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def max_size(self) -> int | None:
        """Memory cache bound, or None when unbounded."""
        return self.cache_max_size or None

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.retry_attempts < 1:
            raise ValueError(f"RETRY_ATTEMPTS must be at least 1, got {self.retry_attempts}")

        if self.cache_default_ttl <= 0 or self.storage_default_ttl <= 0:
            raise ValueError("CACHE_DEFAULT_TTL_MS and STORAGE_DEFAULT_TTL_MS must be positive")

        if self.cache_max_size < 0:
            raise ValueError(f"CACHE_MAX_SIZE must not be negative, got {self.cache_max_size}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
