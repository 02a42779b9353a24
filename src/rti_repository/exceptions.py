"""Exceptions raised by the data-access layer.

Cache strategies fail open: storage errors are caught inside the strategy
and downgraded to a miss. Only repositories surface failures to callers,
always as RepositoryError chained to the original exception.
"""

from typing import Any


class StorageError(Exception):
    """Raised by a KeyValueStorage backend when a read or write fails."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.message = message
        self.key = key
        super().__init__(message)


class StorageQuotaExceededError(StorageError):
    """Raised when the backing store rejects a write because it is full."""


class RepositoryError(Exception):
    """Raised when a repository operation fails after retries.

    Attributes:
        message: Human-readable description
        original_error: The exception that caused the failure, if any
        context: Extra details (repository name, operation, options)
    """

    def __init__(
        self,
        message: str,
        original_error: BaseException | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)
        if original_error is not None:
            self.__cause__ = original_error
