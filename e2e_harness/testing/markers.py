"""Pytest marker configuration.

Marker Reference:
- @pytest.mark.unit - Unit tests (mocks and fake transports only)
- @pytest.mark.e2e - Scenarios against the running API
- @pytest.mark.requires_api - Skipped when the API base URL is unreachable
- @pytest.mark.requires_db - Skipped when DB_URL is unset or unreachable

All skip decisions are made here, from real service availability.
"""

import pytest

from e2e_harness.testing.services import clear_service_cache, get_cached_service_status


def configure_markers(config) -> None:
    """Register custom markers. Called from pytest_configure."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (may use mocks)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end scenarios against the running API"
    )
    config.addinivalue_line(
        "markers", "requires_api: Tests requiring the API under test (HARNESS_BASE_URL)"
    )
    config.addinivalue_line(
        "markers", "requires_db: Tests requiring the fixture database (DB_URL)"
    )


def apply_skip_markers(config, items) -> None:
    """Skip service-dependent tests when the service is not there.

    Called from pytest_collection_modifyitems. Service checks run at most
    once per session, and only if some collected test needs them.
    """
    needs_services = any(
        item.get_closest_marker("requires_api") or item.get_closest_marker("requires_db")
        for item in items
    )
    if not needs_services:
        return

    clear_service_cache()
    status = get_cached_service_status()

    skip_api = pytest.mark.skip(
        reason="API not available - start the service or set HARNESS_BASE_URL"
    )
    skip_db = pytest.mark.skip(
        reason="Database not available - set DB_URL (and DB_CLIENT) to a reachable database"
    )

    for item in items:
        if item.get_closest_marker("requires_api") and not status["api"]:
            item.add_marker(skip_api)
        if item.get_closest_marker("requires_db") and not status["database"]:
            item.add_marker(skip_db)


__all__ = [
    "configure_markers",
    "apply_skip_markers",
]
