"""Base repository with caching, retry and transformation.

A repository answers "get or compute a value for a key": it asks its cache
strategy first, and on a miss fetches raw data, validates and transforms it
through the configured pipeline, stores the result and returns it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt, wait_exponential

from rti_repository.entities import RepositoryConfig
from rti_repository.exceptions import RepositoryError
from rti_repository.protocols import validate_input

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BaseRepository:
    """Common behaviour for data repositories.

    Features:
    - Cache-first reads with fail-open cache access
    - Retry with exponential backoff (200ms, 400ms, 800ms, ...)
    - Errors wrapped in RepositoryError and logged
    - Validation and transformation through the configured pipeline

    Subclasses set ``repository_name`` and implement their own fetchers.

    Example:
        ```python
        class RTIRepository(BaseRepository):
            repository_name = "RTIRepository"

            async def get_request(self, rti_id: str) -> dict:
                return await self.get_or_fetch(f"rti:{rti_id}", lambda: self._load(rti_id))
        ```
    """

    repository_name: str = "BaseRepository"

    # Seconds; attempt n waits retry_backoff * 2 ** (n - 1)
    retry_backoff: float = 0.2

    def __init__(self, config: RepositoryConfig) -> None:
        """Initialize the repository.

        Args:
            config: Cache, transformation and retry settings, usually from RepositoryFactory.
        """
        self._config = config

    @property
    def config(self) -> RepositoryConfig:
        """Get the repository configuration."""
        return self._config

    def cache_key(self, key: str) -> str:
        """Namespace a key by repository, since repositories may share a cache."""
        return f"{self.repository_name}:{key}"

    async def get_or_fetch(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
        use_cache: bool = True,
    ) -> Any:
        """Return the cached view-model for key, fetching and transforming on a miss.

        Args:
            key: Cache key (namespaced by repository name)
            fetcher: Coroutine factory returning the raw payload
            ttl: Cache TTL in milliseconds. Defaults to the cache strategy's.
            use_cache: Skip the cache entirely when False

        Returns:
            The transformed data

        Raises:
            RepositoryError: If fetching (after retries), validation or transformation fails
        """
        cache_key = self.cache_key(key)

        if use_cache:
            cached = await self._read_cache(cache_key)
            if cached is not None:
                return cached

        raw = await self.with_error_handling(fetcher, f"fetch({key})")

        strategy = self._config.transformation_strategy
        self.validate(raw, lambda data: validate_input(strategy, data), f"Invalid data received for {key}")
        result = self.transform(raw, strategy.transform, key)

        if use_cache:
            await self._write_cache(cache_key, result, ttl)

        return result

    async def invalidate(self, key: str) -> None:
        """Drop a cached view-model so the next read refetches it."""
        await self._config.cache_strategy.delete(self.cache_key(key))

    async def _read_cache(self, cache_key: str) -> Any | None:
        try:
            return await self._config.cache_strategy.get(cache_key)
        except Exception as e:
            self.log_warning(f"Cache read failed for {cache_key}: {e}")
            return None

    async def _write_cache(self, cache_key: str, data: Any, ttl: int | None) -> None:
        try:
            await self._config.cache_strategy.set(cache_key, data, ttl)
        except Exception as e:
            self.log_warning(f"Cache write failed for {cache_key}: {e}")

    async def with_error_handling(
        self,
        operation: Callable[[], Awaitable[T]],
        context: str,
        retry: bool | None = None,
        retry_attempts: int | None = None,
    ) -> T:
        """Run an async operation with retry, wrapping failures.

        Args:
            operation: Coroutine factory to execute
            context: Operation name for errors and logs
            retry: Override the config's enable_retry
            retry_attempts: Override the config's retry_attempts

        Returns:
            The operation's result

        Raises:
            RepositoryError: Wrapping the last failure
        """
        retry = self._config.enable_retry if retry is None else retry
        attempts = self._config.retry_attempts if retry_attempts is None else retry_attempts

        try:
            return await self._execute_with_retry(operation, retry, attempts)
        except Exception as e:
            error = RepositoryError(
                f"Failed to execute {context}",
                original_error=e,
                context={
                    "repository_name": self.repository_name,
                    "context": context,
                    "retry": retry,
                    "retry_attempts": attempts,
                },
            )
            self.log_error(error.message, e)
            raise error from e

    async def _execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        retry: bool,
        attempts: int,
    ) -> T:
        if not retry:
            return await operation()

        def log_retry(retry_state: RetryCallState) -> None:
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            self.log_info(f"Retry attempt {retry_state.attempt_number}/{attempts} after {delay * 1000:.0f}ms")

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=self.retry_backoff),
            before_sleep=log_retry,
            reraise=True,
        ):
            with attempt:
                result = await operation()
        return result

    def validate(self, data: T, validator: Callable[[T], bool], error_message: str) -> None:
        """Raise RepositoryError if ``validator`` rejects ``data``."""
        if not validator(data):
            raise RepositoryError(
                error_message,
                context={"data": data, "repository_name": self.repository_name},
            )

    def transform(self, data: T, transformer: Callable[[T], R], context: str) -> R:
        """Apply ``transformer``, wrapping any failure in RepositoryError."""
        try:
            return transformer(data)
        except Exception as e:
            error = RepositoryError(
                f"Failed to transform data in {context}",
                original_error=e,
                context={"repository_name": self.repository_name, "context": context},
            )
            self.log_error(error.message, e)
            raise error from e

    @staticmethod
    def is_network_error(error: BaseException) -> bool:
        """Check if an error came from the transport (connection, DNS, protocol)."""
        if isinstance(error, httpx.TransportError) and not isinstance(error, httpx.TimeoutException):
            return True
        return isinstance(error, ConnectionError) or "network" in str(error).lower()

    @staticmethod
    def is_timeout_error(error: BaseException) -> bool:
        """Check if an error was a timeout."""
        if isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
            return True
        return "timeout" in str(error).lower()

    def log_info(self, message: str) -> None:
        logger.info(f"[{self.repository_name}] {message}")

    def log_warning(self, message: str) -> None:
        logger.warning(f"[{self.repository_name}] {message}")

    def log_error(self, message: str, error: BaseException | None = None) -> None:
        suffix = f": {error}" if error is not None else ""
        logger.error(f"[{self.repository_name}] {message}{suffix}")
