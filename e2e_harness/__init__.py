"""e2e_harness - end-to-end API test harness.

HTTP request wrapper with bearer-token injection, resource service objects,
and a short-lived-connection database bridge for seeding and verifying
PostgreSQL/MySQL fixtures.
"""

__version__ = "0.1.0"

from e2e_harness.database import DatabaseBridge, QueryRequest
from e2e_harness.errors import (
    HarnessError,
    MissingConfigurationError,
    QueryExecutionError,
    RequestFailedError,
    UnknownTaskError,
    UnsupportedClientError,
)
from e2e_harness.http import ApiClient, AuthContext, HttpCallSpec, HttpMethod, NormalizedResponse
from e2e_harness.services import ResourceService, UsersService
from e2e_harness.tasks import TaskRunner

__all__ = [
    "DatabaseBridge",
    "QueryRequest",
    "ApiClient",
    "AuthContext",
    "HttpCallSpec",
    "HttpMethod",
    "NormalizedResponse",
    "ResourceService",
    "UsersService",
    "TaskRunner",
    "HarnessError",
    "MissingConfigurationError",
    "UnsupportedClientError",
    "QueryExecutionError",
    "RequestFailedError",
    "UnknownTaskError",
]
