"""Pytest fixtures for API scenarios.

Import these into a conftest.py:

    from e2e_harness.testing.fixtures import (
        harness_settings, auth_context, set_auth_token, api_client,
        users_service, db_bridge, task, scenario_logger,
    )

Every test gets a fresh AuthContext, so no token survives from one
scenario into the next.
"""

from typing import AsyncIterator, Callable, Iterator, Optional

import pytest

from e2e_harness.database.bridge import DatabaseBridge
from e2e_harness.http.auth import AuthContext
from e2e_harness.http.client import ApiClient
from e2e_harness.logging import configure_logging, create_logger, scenario_scope
from e2e_harness.protocols import LoggerProtocol
from e2e_harness.services.users import UsersService
from e2e_harness.settings import Settings, get_settings
from e2e_harness.tasks import TaskRunner


@pytest.fixture(scope="session")
def harness_settings() -> Settings:
    """Session settings; configures logging once."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)
    return settings


@pytest.fixture
def scenario_logger(request) -> Iterator[LoggerProtocol]:
    """Logger bound to the current test's node id."""
    with scenario_scope(request.node.nodeid, create_logger("scenario")) as logger:
        yield logger


@pytest.fixture
def auth_context() -> AuthContext:
    """Empty auth state, new for every test."""
    return AuthContext()


@pytest.fixture
def set_auth_token(auth_context: AuthContext, scenario_logger: LoggerProtocol) -> Callable[[Optional[str]], None]:
    """Set the bearer token used by api_client for the rest of the test."""

    def _set(token: Optional[str]) -> None:
        auth_context.set_token(token)
        scenario_logger.info("auth_token_set", has_token=bool(token))

    return _set


@pytest.fixture
async def api_client(
    harness_settings: Settings,
    auth_context: AuthContext,
    scenario_logger: LoggerProtocol,
) -> AsyncIterator[ApiClient]:
    """ApiClient bound to this test's AuthContext and the configured base URL."""
    client = ApiClient(
        auth_context,
        base_url=harness_settings.base_url,
        timeout=harness_settings.http_timeout,
        logger=scenario_logger,
    )
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def users_service(api_client: ApiClient) -> UsersService:
    return UsersService(api_client)


@pytest.fixture
def db_bridge(harness_settings: Settings, scenario_logger: LoggerProtocol) -> DatabaseBridge:
    return DatabaseBridge(config=harness_settings.db_config(), logger=scenario_logger)


@pytest.fixture
def task(db_bridge: DatabaseBridge, scenario_logger: LoggerProtocol):
    """Run a named database task: ``await task("queryDatabase", {...})``."""
    return TaskRunner(bridge=db_bridge, logger=scenario_logger).run


__all__ = [
    "harness_settings",
    "scenario_logger",
    "auth_context",
    "set_auth_token",
    "api_client",
    "users_service",
    "db_bridge",
    "task",
]
