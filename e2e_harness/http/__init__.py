"""HTTP request wrapper - auth-aware client returning normalized responses."""

from e2e_harness.http.auth import AuthContext
from e2e_harness.http.client import ApiClient, DEFAULT_CONTENT_TYPE
from e2e_harness.http.types import HttpCallSpec, HttpMethod, NormalizedResponse

__all__ = [
    "AuthContext",
    "ApiClient",
    "DEFAULT_CONTENT_TYPE",
    "HttpCallSpec",
    "HttpMethod",
    "NormalizedResponse",
]
