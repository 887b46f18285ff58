"""Named database tasks for scenarios.

Scenarios reach the database through three tasks, each taking a single
options mapping:

    queryDatabase  {"query": str, "values": list}  -> rows
    seedDatabase   {"sqlPath": str}                -> True
    clearDatabase  {"sqlPath": str}                -> True

clearDatabase runs the given script exactly like seedDatabase; the script
itself decides what "clear" means (DELETE/TRUNCATE fixtures).
"""

from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from e2e_harness.database.bridge import DatabaseBridge
from e2e_harness.database.types import QueryRequest, QueryResult
from e2e_harness.errors import UnknownTaskError
from e2e_harness.logging import get_component_logger
from e2e_harness.protocols import LoggerProtocol

TaskHandler = Callable[[Mapping[str, Any]], Awaitable[Any]]


def read_sql_file(sql_path: str) -> str:
    """Read a fixture script as UTF-8 text."""
    path = Path(sql_path)
    if not path.exists():
        raise FileNotFoundError(f"SQL fixture not found: {sql_path}")
    return path.read_text(encoding="utf-8")


class TaskRunner:
    """Dispatches task names to database bridge operations."""

    def __init__(
        self,
        bridge: Optional[DatabaseBridge] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        self._logger = get_component_logger("TaskRunner", logger)
        self.bridge = bridge or DatabaseBridge(logger=self._logger)
        self._tasks: Dict[str, TaskHandler] = {
            "queryDatabase": self.query_database,
            "seedDatabase": self.seed_database,
            "clearDatabase": self.clear_database,
        }

    @property
    def task_names(self) -> list[str]:
        return list(self._tasks)

    async def run(self, name: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Run a task by name with its options mapping."""
        handler = self._tasks.get(name)
        if handler is None:
            raise UnknownTaskError(name)
        self._logger.debug("task_started", task=name)
        return await handler(options or {})

    async def query_database(self, options: Mapping[str, Any]) -> QueryResult:
        request = QueryRequest(
            statement_text=options["query"],
            parameters=tuple(options.get("values") or ()),
        )
        return await self.bridge.execute_query(request)

    async def seed_database(self, options: Mapping[str, Any]) -> bool:
        # Resolve configuration before touching the file system
        self.bridge.resolve()
        script = read_sql_file(options["sqlPath"])
        return await self.bridge.execute_script(script)

    async def clear_database(self, options: Mapping[str, Any]) -> bool:
        return await self.seed_database(options)


__all__ = [
    "TaskRunner",
    "TaskHandler",
    "read_sql_file",
]
