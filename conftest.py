"""Root conftest.py for e2e-harness tests.

This file MUST be at the repository root for fixtures to be discovered
when running tests from any subdirectory.

Provides shared fixtures used across all test modules:
- mock_logger: LoggerProtocol stand-in
- mock_db_client: DatabaseClientProtocol stand-in with call tracking
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing.

    Components accept an injected logger, so tests pass this one in and
    can assert on emitted events.
    """
    logger = MagicMock()
    logger.info = MagicMock()
    logger.debug = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.bind = MagicMock(return_value=logger)
    return logger


@pytest.fixture
def mock_db_client():
    """Create a mock async database client.

    Provides async methods for:
    - connect() -> None
    - disconnect() -> None
    - fetch_all(query, parameters) -> List[Dict]
    - execute_script(script) -> None
    """
    db = MagicMock()
    db.backend = "postgres"
    db.connect = AsyncMock(return_value=None)
    db.disconnect = AsyncMock(return_value=None)
    db.fetch_all = AsyncMock(return_value=[])
    db.execute_script = AsyncMock(return_value=None)
    return db
