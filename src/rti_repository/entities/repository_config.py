"""Repository configuration entity."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rti_repository.protocols import CacheStrategy, DataTransformationStrategy


def _json_headers() -> Mapping[str, str]:
    return {"Content-Type": "application/json"}


@dataclass(frozen=True)
class RepositoryConfig:
    """How a repository fetches, caches and shapes its data.

    Configs are immutable values: derive a new one with
    ``dataclasses.replace`` or the RepositoryConfigBuilder. Repositories
    only share state when they are given the same cache strategy instance.

    Attributes:
        cache_strategy: Cache consulted before every fetch
        transformation_strategy: Pipeline turning raw payloads into view-models
        enable_retry: Whether failed fetches are retried
        retry_attempts: Total attempts when retry is enabled
        base_url: Base URL for HTTP requests
        default_headers: Headers sent with every request (read-only)
    """

    cache_strategy: "CacheStrategy"
    transformation_strategy: "DataTransformationStrategy"
    enable_retry: bool = True
    retry_attempts: int = 3
    base_url: str = "/api"
    default_headers: Mapping[str, str] = field(default_factory=_json_headers)

    def __post_init__(self) -> None:
        """Validate and freeze the header mapping."""
        if self.retry_attempts < 1:
            raise ValueError(f"retry_attempts must be at least 1, got {self.retry_attempts}")
        object.__setattr__(self, "default_headers", MappingProxyType(dict(self.default_headers)))
