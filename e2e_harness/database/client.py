"""Async SQL client base using SQLAlchemy.

One client instance owns exactly one connection: connect() opens it,
disconnect() closes it and disposes the engine. Engines are created with
NullPool so nothing outlives the client.
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from e2e_harness.database.sql import (
    prepare_query_and_params,
    prepare_statement,
    split_sql_statements,
)
from e2e_harness.logging import get_component_logger
from e2e_harness.protocols import LoggerProtocol


def to_async_url(database_url: str, driver: str, schemes: Sequence[str]) -> str:
    """Point a plain connection URL at an async driver.

    URLs that already name a driver (postgresql+asyncpg://...) are returned
    unchanged.

    Args:
        database_url: Connection string as configured
        driver: Async drivername to use (e.g. "postgresql+asyncpg")
        schemes: Plain schemes this backend accepts (e.g. "postgres")
    """
    url = make_url(database_url)
    if "+" in url.drivername:
        return database_url
    if url.drivername not in schemes:
        raise ValueError(
            f"Connection URL scheme '{url.drivername}' does not match backend "
            f"(expected one of: {', '.join(schemes)})"
        )
    return url.set(drivername=driver).render_as_string(hide_password=False)


class SQLAlchemyClient:
    """Single-connection async client shared by the concrete backends.

    Subclasses set backend, driver and schemes, and may override
    _engine_kwargs().
    """

    backend: str = "sql"
    driver: str = ""
    schemes: Sequence[str] = ()

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        logger: Optional[LoggerProtocol] = None,
    ):
        """Initialize client.

        Args:
            database_url: Connection URL (plain or driver-qualified)
            echo: Echo SQL statements for debugging
            logger: Logger for DI (uses context logger if not provided)
        """
        self._logger = get_component_logger(type(self).__name__, logger).bind(backend=self.backend)
        self.database_url = database_url
        self.echo = echo

        self.engine: Optional[AsyncEngine] = None
        self._conn: Optional[AsyncConnection] = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def _engine_kwargs(self) -> Dict[str, Any]:
        return {}

    async def connect(self) -> None:
        """Create the engine and open the connection."""
        if self._conn is not None:
            self._logger.warning("db_already_connected")
            return

        url = to_async_url(self.database_url, self.driver, self.schemes)
        self.engine = create_async_engine(
            url,
            poolclass=NullPool,
            echo=self.echo,
            **self._engine_kwargs(),
        )
        self._conn = await self.engine.connect()
        self._logger.debug("db_connected")

    async def disconnect(self) -> None:
        """Close the connection and dispose the engine."""
        try:
            if self._conn is not None:
                await self._conn.close()
            if self.engine is not None:
                await self.engine.dispose()
            self._logger.debug("db_disconnected")
        except Exception as e:
            self._logger.error("db_disconnect_failed", error=str(e))
        finally:
            self._conn = None
            self.engine = None

    def _require_connection(self) -> AsyncConnection:
        if self._conn is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._conn

    async def fetch_all(
        self,
        query: str,
        parameters: Optional[Sequence[Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Run one statement in a transaction and return its rows as dicts.

        Statements that return no rows (plain INSERT/UPDATE/DELETE) give [].
        """
        conn = self._require_connection()
        prepared_query, prepared_params = prepare_query_and_params(query, parameters)

        async with conn.begin():
            result = await conn.execute(text(prepared_query), prepared_params)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]

    async def execute_script(self, script: str) -> None:
        """Execute a multi-statement script in a single transaction."""
        conn = self._require_connection()
        statements = split_sql_statements(script)

        async with conn.begin():
            for statement in statements:
                try:
                    await conn.execute(text(prepare_statement(statement)))
                except Exception as e:
                    self._logger.error(
                        "execute_script_statement_failed",
                        statement=statement[:100],
                        error=str(e),
                    )
                    raise

        self._logger.debug("execute_script_completed", statements=len(statements))


__all__ = [
    "SQLAlchemyClient",
    "to_async_url",
]
