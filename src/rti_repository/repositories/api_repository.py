"""HTTP-backed repository.

Fetches JSON resources with httpx using the repository configuration's
base URL and default headers, then runs them through the cache and
transformation pipeline of BaseRepository.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import httpx

from rti_repository.config import settings
from rti_repository.entities import RepositoryConfig

from .base_repository import BaseRepository


class ApiRepository(BaseRepository):
    """Repository for JSON endpoints under ``config.base_url``.

    Example:
        ```python
        factory = RepositoryFactory.create()
        rtis = factory.create_repository(
            "rtis",
            ApiRepository,
            transformation_strategy=ArrayTransformationStrategy(RTISummaryStrategy()),
        )
        summaries = await rtis.get_resource("/rti-requests", params={"status": "pending"})
        ```
    """

    repository_name = "ApiRepository"

    def __init__(
        self,
        config: RepositoryConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the API repository.

        Args:
            config: Repository configuration (base URL, headers, cache, pipeline)
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
            timeout: Request timeout in seconds. Defaults to settings.
        """
        super().__init__(config)
        self._transport = transport
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=dict(self._config.default_headers),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def fetch_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET a path relative to the base URL and decode its JSON body.

        Raises:
            httpx.HTTPError: If the request fails or returns an error status
        """
        response = await self.client.get(path, params=dict(params) if params else None)
        response.raise_for_status()
        return response.json()

    async def get_resource(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        ttl: int | None = None,
        use_cache: bool = True,
    ) -> Any:
        """Get a transformed resource, served from cache when fresh.

        Args:
            path: Path relative to the base URL
            params: Query parameters (part of the cache key)
            ttl: Cache TTL in milliseconds
            use_cache: Bypass the cache when False

        Returns:
            The transformed resource

        Raises:
            RepositoryError: If the fetch fails after retries or the payload is invalid
        """
        key = path
        if params:
            key = f"{path}?{urlencode(sorted(params.items()))}"

        return await self.get_or_fetch(
            key,
            lambda: self.fetch_json(path, params),
            ttl=ttl,
            use_cache=use_cache,
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
