"""HTTP call and response shapes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class HttpCallSpec:
    """One HTTP call. url may be absolute or relative to the client's base URL."""

    method: HttpMethod
    url: str
    body: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class NormalizedResponse:
    """Uniform response shape, populated for every status code."""

    status: int
    body: Any
    headers: Dict[str, str]
    duration_ms: float

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "body": self.body,
            "headers": self.headers,
            "duration_ms": self.duration_ms,
        }


__all__ = [
    "HttpMethod",
    "HttpCallSpec",
    "NormalizedResponse",
]
