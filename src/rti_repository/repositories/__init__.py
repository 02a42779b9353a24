"""Repository layer for data access.

This layer holds the storage backends behind the persistent cache and the
repositories that fetch, cache and transform data:
- RedisStorage / InMemoryStorage: KeyValueStorage implementations
- BaseRepository: cache-first reads, retry, validation, transformation
- ApiRepository: BaseRepository over JSON HTTP endpoints (httpx)

The storage backends are protocol-based (structural typing), not
inheritance-based. Any class implementing the required methods will
satisfy the protocol.
"""

from rti_repository.exceptions import RepositoryError
from rti_repository.protocols import KeyValueStorage

from .api_repository import ApiRepository
from .base_repository import BaseRepository
from .memory_storage import InMemoryStorage
from .redis_storage import RedisStorage

__all__ = [
    "KeyValueStorage",
    "RedisStorage",
    "InMemoryStorage",
    "BaseRepository",
    "ApiRepository",
    "RepositoryError",
]
