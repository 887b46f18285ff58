"""Database bridge: short-lived connections for fixture seeding and verification.

Every call resolves its connection descriptor, opens a fresh connection,
runs one query or script, and closes the connection on every path. Store
errors surface as QueryExecutionError after the close.
"""

from typing import Any, Callable, Mapping, Optional

from e2e_harness.database.registry import create_database_client
from e2e_harness.database.types import (
    ConnectionDescriptor,
    QueryRequest,
    QueryResult,
    resolve_descriptor,
)
from e2e_harness.errors import QueryExecutionError
from e2e_harness.logging import get_component_logger
from e2e_harness.protocols import DatabaseClientProtocol, LoggerProtocol

ClientFactory = Callable[..., DatabaseClientProtocol]


class DatabaseBridge:
    """Runs fixture queries and scripts against PostgreSQL or MySQL.

    Args:
        config: Fallback mapping with DB_URL / DB_CLIENT (environment wins)
        logger: Logger for DI (uses context logger if not provided)
        client_factory: Builds an unconnected client from a descriptor
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        logger: Optional[LoggerProtocol] = None,
        client_factory: ClientFactory = create_database_client,
    ):
        self._config = dict(config or {})
        self._logger = get_component_logger("DatabaseBridge", logger)
        self._client_factory = client_factory

    def resolve(self) -> ConnectionDescriptor:
        """Resolve the descriptor for the next call (env first, then config)."""
        return resolve_descriptor(self._config)

    async def execute_query(self, request: QueryRequest) -> QueryResult:
        """Run a parameterized statement and return its rows.

        Raises:
            MissingConfigurationError: No DB_URL resolvable
            UnsupportedClientError: Unknown DB_CLIENT tag
            QueryExecutionError: The store rejected the statement
        """
        descriptor = self.resolve()
        client = self._client_factory(descriptor, logger=self._logger)

        try:
            await client.connect()
            rows = await client.fetch_all(request.statement_text, list(request.parameters))
        except Exception as e:
            self._logger.error(
                "db_query_failed",
                backend=descriptor.client_kind.value,
                statement=request.statement_text[:100],
                error=str(e),
            )
            raise QueryExecutionError("Database query failed", cause=e) from e
        finally:
            await client.disconnect()

        self._logger.debug(
            "db_query_completed",
            backend=descriptor.client_kind.value,
            rows=len(rows),
        )
        return rows

    async def execute_script(self, script_text: str) -> bool:
        """Run an unparameterized multi-statement script. Returns True on success.

        Raises:
            MissingConfigurationError: No DB_URL resolvable
            UnsupportedClientError: Unknown DB_CLIENT tag
            QueryExecutionError: Any statement in the script failed
        """
        descriptor = self.resolve()
        client = self._client_factory(descriptor, logger=self._logger)

        try:
            await client.connect()
            await client.execute_script(script_text)
        except Exception as e:
            self._logger.error(
                "db_script_failed",
                backend=descriptor.client_kind.value,
                error=str(e),
            )
            raise QueryExecutionError("Database script failed", cause=e) from e
        finally:
            await client.disconnect()

        self._logger.info("db_script_completed", backend=descriptor.client_kind.value)
        return True


__all__ = [
    "DatabaseBridge",
    "ClientFactory",
]
