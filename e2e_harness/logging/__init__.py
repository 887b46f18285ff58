"""Structured logging for the harness.

Clients, the bridge and the task runner take an optional logger; without
one they log through the context logger, which the scenario_logger fixture
binds to the running test.

    configure_logging(level="DEBUG")
    bridge = DatabaseBridge(logger=create_logger("db_bridge"))
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

import structlog

from e2e_harness.protocols import LoggerProtocol

# Third-party loggers that stay at WARNING regardless of the harness level
QUIET_LIBRARIES = ("httpx", "httpcore", "asyncpg", "aiomysql", "sqlalchemy.engine")

_configured = False

_current_logger: ContextVar[Optional[LoggerProtocol]] = ContextVar("current_logger", default=None)


class Logger:
    """LoggerProtocol over a structlog bound logger."""

    def __init__(self, bound: Any = None, **context: Any):
        self._context = context
        self._logger = (bound or structlog.get_logger()).bind(**context)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, **kwargs)

    def bind(self, **kwargs: Any) -> "Logger":
        return Logger(**{**self._context, **kwargs})


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """Set up structlog output for the test session.

    Only the first call has an effect. Events below ``level`` are dropped;
    output is one console line per event, or JSON when ``json_output``.
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(message)s", stream=sys.stdout)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def create_logger(component: str, **context: Any) -> LoggerProtocol:
    """New logger tagged with ``component`` plus any extra context."""
    return Logger(component=component, **context)


def get_current_logger() -> LoggerProtocol:
    return _current_logger.get() or Logger()


def set_current_logger(logger: LoggerProtocol) -> None:
    _current_logger.set(logger)


def get_component_logger(component: str, logger: Optional[LoggerProtocol] = None) -> LoggerProtocol:
    """Bind ``component`` onto the injected logger, or onto the context logger."""
    return (logger or get_current_logger()).bind(component=component)


@contextmanager
def scenario_scope(scenario: str, logger: Optional[LoggerProtocol] = None) -> Iterator[LoggerProtocol]:
    """Make a scenario-bound logger the context logger until the block exits."""
    bound = (logger or get_current_logger()).bind(scenario=scenario)
    token = _current_logger.set(bound)
    try:
        yield bound
    finally:
        _current_logger.reset(token)


__all__ = [
    "Logger",
    "QUIET_LIBRARIES",
    "configure_logging",
    "create_logger",
    "get_component_logger",
    "get_current_logger",
    "set_current_logger",
    "scenario_scope",
]
