"""Database bridge value types and connection resolution."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from e2e_harness.errors import MissingConfigurationError, UnsupportedClientError

DEFAULT_CLIENT_TAG = "pg"


class ClientKind(str, Enum):
    """Supported relational stores, keyed by their client tag."""

    POSTGRES = "pg"
    MYSQL = "mysql"

    @classmethod
    def from_tag(cls, tag: str) -> "ClientKind":
        """Resolve a client tag, raising UnsupportedClientError if unknown."""
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedClientError(tag) from None


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Where and how to connect. Recreated for every bridge call."""

    db_url: str
    client_kind: ClientKind = ClientKind.POSTGRES

    def __repr__(self) -> str:
        # Keep credentials out of logs and assertion output
        scheme = self.db_url.split("://", 1)[0]
        return f"ConnectionDescriptor(db_url='{scheme}://***', client_kind={self.client_kind.value!r})"


@dataclass(frozen=True)
class QueryRequest:
    """Parameterized statement; parameters line up with positional placeholders."""

    statement_text: str
    parameters: Sequence[Any] = field(default_factory=tuple)


# Rows as returned by the store, column name -> value.
QueryResult = List[Dict[str, Any]]


def resolve_descriptor(config: Optional[Mapping[str, Any]] = None) -> ConnectionDescriptor:
    """Build a ConnectionDescriptor from the environment, falling back to config.

    Environment variables take precedence over the mapping. The URL is checked
    before the client tag, so a missing DB_URL is always reported first.

    Args:
        config: Optional mapping with DB_URL / DB_CLIENT keys

    Raises:
        MissingConfigurationError: No DB_URL anywhere
        UnsupportedClientError: DB_CLIENT is not a known tag
    """
    config = config or {}

    db_url = os.environ.get("DB_URL") or config.get("DB_URL")
    if not db_url:
        raise MissingConfigurationError("DB_URL")

    tag = os.environ.get("DB_CLIENT") or config.get("DB_CLIENT") or DEFAULT_CLIENT_TAG
    return ConnectionDescriptor(db_url=db_url, client_kind=ClientKind.from_tag(str(tag)))


__all__ = [
    "ClientKind",
    "ConnectionDescriptor",
    "QueryRequest",
    "QueryResult",
    "resolve_descriptor",
    "DEFAULT_CLIENT_TAG",
]
