"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers of the admin API.
Handlers depend on the RepositoryFactory, not on individual repositories.

Architecture:
    Handler -> RepositoryFactory -> CacheStrategy
    (HTTP)  -> (Composition)     -> (Data Access)
"""

from .cache_handler import CacheHandler

__all__ = [
    "CacheHandler",
]
