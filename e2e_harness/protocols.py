"""Protocol definitions - interfaces for dependency injection.

These are typing.Protocol classes for static type checking.
Concrete implementations live in e2e_harness.logging and
e2e_harness.database.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable


# =============================================================================
# LOGGING
# =============================================================================

@runtime_checkable
class LoggerProtocol(Protocol):
    """Structured logging interface."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def bind(self, **kwargs: Any) -> "LoggerProtocol": ...


# =============================================================================
# DATABASE
# =============================================================================

@runtime_checkable
class DatabaseClientProtocol(Protocol):
    """Capability interface implemented once per backing store.

    Lifecycle: connect/disconnect (one connection per client instance)
    Query: fetch_all (parameterized, positional)
    Script: execute_script (unparameterized, multi-statement)
    Identity: backend property
    """

    backend: str

    async def connect(self) -> None: ...
    async def disconnect(self) -> None: ...

    async def fetch_all(
        self,
        query: str,
        parameters: Optional[Sequence[Any]] = None,
    ) -> List[Dict[str, Any]]: ...

    async def execute_script(self, script: str) -> None: ...


# =============================================================================
# AUTH
# =============================================================================

# Zero-argument callable run before the single retry; may be sync or async.
RefreshHook = Callable[[], Union[None, Awaitable[None]]]


__all__ = [
    "LoggerProtocol",
    "DatabaseClientProtocol",
    "RefreshHook",
]
