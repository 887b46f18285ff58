"""Service availability detection for test skip logic.

Checks real TCP connectivity to the API under test and to the fixture
database. Configure targets via HARNESS_BASE_URL / DB_URL.

Usage:
    from e2e_harness.testing.services import get_cached_service_status

    if not get_cached_service_status()["api"]:
        pytest.skip("API not available")
"""

import os
import socket
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from urllib.parse import urlsplit

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from e2e_harness.settings import get_settings

_DEFAULT_PORTS = {"http": 80, "https": 443, "postgres": 5432, "postgresql": 5432, "mysql": 3306}


@dataclass
class ServiceStatus:
    """Status of a service check."""
    available: bool
    host: str
    port: int
    error: Optional[str] = None


def _tcp_check(host: str, port: int, timeout: float) -> ServiceStatus:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return ServiceStatus(available=True, host=host, port=port)
    except OSError as e:
        return ServiceStatus(available=False, host=host, port=port, error=str(e))


def check_api(base_url: Optional[str] = None, timeout: float = 2.0) -> ServiceStatus:
    """TCP check against the API base URL."""
    parts = urlsplit(base_url or get_settings().base_url)
    host = parts.hostname or "localhost"
    port = parts.port or _DEFAULT_PORTS.get(parts.scheme, 80)
    return _tcp_check(host, port, timeout)


def check_database(db_url: Optional[str] = None, timeout: float = 2.0) -> ServiceStatus:
    """TCP check against DB_URL; unavailable when no URL is configured."""
    db_url = db_url or os.environ.get("DB_URL") or get_settings().db_url
    if not db_url:
        return ServiceStatus(available=False, host="", port=0, error="DB_URL not set")

    try:
        url = make_url(db_url)
    except ArgumentError as e:
        return ServiceStatus(available=False, host="", port=0, error=str(e))

    scheme = url.drivername.split("+", 1)[0]
    host = url.host or "localhost"
    port = url.port or _DEFAULT_PORTS.get(scheme, 5432)
    return _tcp_check(host, port, timeout)


def is_api_available(timeout: float = 2.0) -> bool:
    return check_api(timeout=timeout).available


def is_database_available(timeout: float = 2.0) -> bool:
    return check_database(timeout=timeout).available


@lru_cache(maxsize=1)
def get_cached_service_status() -> dict:
    """Availability of every service, checked once per session."""
    return {
        "api": is_api_available(),
        "database": is_database_available(),
    }


def clear_service_cache() -> None:
    get_cached_service_status.cache_clear()


__all__ = [
    "ServiceStatus",
    "check_api",
    "check_database",
    "is_api_available",
    "is_database_available",
    "get_cached_service_status",
    "clear_service_cache",
]
