"""Async PostgreSQL client (asyncpg driver)."""

from typing import Any, Dict

from e2e_harness.database.client import SQLAlchemyClient


class PostgreSQLClient(SQLAlchemyClient):
    """PostgreSQL backend for the database bridge."""

    backend = "postgres"
    driver = "postgresql+asyncpg"
    schemes = ("postgres", "postgresql")

    def _engine_kwargs(self) -> Dict[str, Any]:
        return {
            "connect_args": {
                "server_settings": {
                    "application_name": "e2e-harness",
                    "jit": "off",  # Disable JIT for better connection startup time
                }
            },
        }


__all__ = ["PostgreSQLClient"]
