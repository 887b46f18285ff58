"""Database backend registry.

Maps each ClientKind to the class implementing DatabaseClientProtocol for
it. Adding a store means adding a ClientKind member and registering one
class here.

Usage:
    from e2e_harness.database.registry import create_database_client

    client = create_database_client(descriptor)
    await client.connect()
"""

from typing import Dict, Optional, Type

from e2e_harness.database.types import ClientKind, ConnectionDescriptor
from e2e_harness.errors import UnsupportedClientError
from e2e_harness.protocols import DatabaseClientProtocol, LoggerProtocol

_BACKENDS: Dict[ClientKind, Type[DatabaseClientProtocol]] = {}


def register_backend(kind: ClientKind, client_class: Type[DatabaseClientProtocol]) -> None:
    """Register (or replace) the implementation for a client kind."""
    _BACKENDS[kind] = client_class


def unregister_backend(kind: ClientKind) -> bool:
    """Remove a registered backend. Returns True if one was removed."""
    return _BACKENDS.pop(kind, None) is not None


def get_backend(kind: ClientKind) -> Optional[Type[DatabaseClientProtocol]]:
    return _BACKENDS.get(kind)


def list_backends() -> list[ClientKind]:
    return list(_BACKENDS.keys())


def create_database_client(
    descriptor: ConnectionDescriptor,
    logger: Optional[LoggerProtocol] = None,
) -> DatabaseClientProtocol:
    """Construct an unconnected client for the descriptor's client kind.

    The caller owns the lifecycle (connect/disconnect).

    Raises:
        UnsupportedClientError: No implementation registered for the kind
    """
    client_class = _BACKENDS.get(descriptor.client_kind)
    if client_class is None:
        raise UnsupportedClientError(descriptor.client_kind.value)
    return client_class(database_url=descriptor.db_url, logger=logger)


# =============================================================================
# Built-in Backend Registration
# =============================================================================

def _register_builtin_backends() -> None:
    """Register PostgreSQL and MySQL on import."""
    from e2e_harness.database.mysql_client import MySQLClient
    from e2e_harness.database.postgres_client import PostgreSQLClient

    register_backend(ClientKind.POSTGRES, PostgreSQLClient)
    register_backend(ClientKind.MYSQL, MySQLClient)


_register_builtin_backends()


__all__ = [
    "register_backend",
    "unregister_backend",
    "get_backend",
    "list_backends",
    "create_database_client",
]
