"""Error taxonomy for the harness.

Every error propagates to the calling scenario. Non-2xx HTTP statuses are
not errors and never appear here.
"""

from typing import Optional


class HarnessError(Exception):
    """Base class for all harness errors."""
    pass


class MissingConfigurationError(HarnessError):
    """Raised when no database connection string can be resolved."""

    def __init__(self, key: str = "DB_URL"):
        self.key = key
        super().__init__(f"{key} not set in env or config")


class UnsupportedClientError(HarnessError):
    """Raised when the database client tag is not a supported ClientKind."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unsupported DB client: {tag}")


class QueryExecutionError(HarnessError):
    """Wraps a store error. The connection is closed before this propagates."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {type(self.cause).__name__}: {self.cause}"


class RequestFailedError(HarnessError):
    """Wraps a transport-level HTTP failure (no response was obtained)."""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        self.message = message
        self.original = original
        super().__init__(message)

    def __str__(self) -> str:
        if self.original is None:
            return self.message
        return f"{self.message}: {type(self.original).__name__}: {self.original}"


class UnknownTaskError(HarnessError):
    """Raised when a task name is not registered with the task runner."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown task: {name}")


__all__ = [
    "HarnessError",
    "MissingConfigurationError",
    "UnsupportedClientError",
    "QueryExecutionError",
    "RequestFailedError",
    "UnknownTaskError",
]
