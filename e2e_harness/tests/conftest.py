"""Pytest configuration for e2e_harness tests.

Unit tests use mocks and httpx.MockTransport only. Scenario tests under
e2e/ talk to the running API and database and are skipped when those are
not reachable.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to the path for imports
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# IMPORT FIXTURES FROM FIXTURES PACKAGE
# =============================================================================

from e2e_harness.testing.fixtures import (
    harness_settings,
    scenario_logger,
    auth_context,
    set_auth_token,
    api_client,
    users_service,
    db_bridge,
    task,
)
from e2e_harness.testing.markers import apply_skip_markers, configure_markers

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    configure_markers(config)


def pytest_collection_modifyitems(config, items):
    apply_skip_markers(config, items)


@pytest.fixture
def sql_fixtures_dir() -> Path:
    return FIXTURES_DIR / "sql"


@pytest.fixture
def clean_db_env(monkeypatch):
    """Remove DB_URL/DB_CLIENT from the environment for this test."""
    monkeypatch.delenv("DB_URL", raising=False)
    monkeypatch.delenv("DB_CLIENT", raising=False)
    return monkeypatch
