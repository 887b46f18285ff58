"""Database bridge - PostgreSQL and MySQL fixture access."""

from e2e_harness.database.bridge import DatabaseBridge
from e2e_harness.database.client import SQLAlchemyClient
from e2e_harness.database.mysql_client import MySQLClient
from e2e_harness.database.postgres_client import PostgreSQLClient
from e2e_harness.database.registry import create_database_client, register_backend
from e2e_harness.database.types import (
    ClientKind,
    ConnectionDescriptor,
    QueryRequest,
    QueryResult,
    resolve_descriptor,
)

__all__ = [
    "DatabaseBridge",
    "SQLAlchemyClient",
    "PostgreSQLClient",
    "MySQLClient",
    "create_database_client",
    "register_backend",
    "ClientKind",
    "ConnectionDescriptor",
    "QueryRequest",
    "QueryResult",
    "resolve_descriptor",
]
