"""Async MySQL client (aiomysql driver)."""

from e2e_harness.database.client import SQLAlchemyClient


class MySQLClient(SQLAlchemyClient):
    """MySQL backend for the database bridge."""

    backend = "mysql"
    driver = "mysql+aiomysql"
    schemes = ("mysql",)


__all__ = ["MySQLClient"]
