"""HTTP request wrapper for API scenarios.

Builds headers from the scenario's AuthContext, never raises on HTTP error
statuses, measures duration, and returns a NormalizedResponse. On a
transport failure it runs the auth refresh hook (if any) and retries the
same call exactly once.

Usage:
    auth = AuthContext()
    async with ApiClient(auth, base_url="http://localhost:3000") as api:
        auth.set_token("abc")
        res = await api.get("/api/users")
        assert res.status == 200
"""

import time
from typing import Any, Dict, Mapping, Optional

import httpx

from e2e_harness.errors import RequestFailedError
from e2e_harness.http.auth import AuthContext
from e2e_harness.http.types import HttpCallSpec, HttpMethod, NormalizedResponse
from e2e_harness.logging import get_component_logger
from e2e_harness.protocols import LoggerProtocol
from e2e_harness.settings import get_settings

DEFAULT_CONTENT_TYPE = "application/json"


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


class ApiClient:
    """Async HTTP client bound to one scenario's AuthContext.

    Args:
        auth: Token/refresh-hook holder (a new empty one if None)
        base_url: API root; defaults to settings.base_url
        timeout: Request timeout in seconds; defaults to settings.http_timeout
        client: Pre-built httpx.AsyncClient (not closed by this wrapper)
        transport: Transport for the internally created client (tests)
        logger: Logger for DI (uses context logger if not provided)
    """

    def __init__(
        self,
        auth: Optional[AuthContext] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[LoggerProtocol] = None,
    ):
        if base_url is None:
            base_url = get_settings().base_url
        if timeout is None and client is None:
            timeout = get_settings().http_timeout

        self.auth = auth if auth is not None else AuthContext()
        self.base_url = base_url.rstrip("/")
        self._logger = get_component_logger("ApiClient", logger).bind(base_url=self.base_url)

        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)
            self._owns_client = True

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this wrapper created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    def build_headers(self, custom_headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Effective headers: caller's, plus bearer token and JSON default."""
        headers = dict(custom_headers or {})

        authorization = self.auth.authorization_header()
        if authorization:
            for key in [k for k in headers if k.lower() == "authorization"]:
                del headers[key]
            headers["Authorization"] = authorization

        if not _has_header(headers, "Content-Type"):
            headers["Content-Type"] = DEFAULT_CONTENT_TYPE

        return headers

    async def send(self, spec: HttpCallSpec) -> NormalizedResponse:
        """Issue the call; retry once after an auth refresh on transport failure.

        Raises:
            RequestFailedError: No response could be obtained
        """
        try:
            return await self._attempt(spec)
        except httpx.RequestError as e:
            self._logger.warning(
                "http_request_error",
                method=spec.method.value,
                url=spec.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            if not self.auth.has_refresh_hook:
                raise RequestFailedError("Request failed", original=e) from e

        await self.auth.refresh()
        self._logger.info("http_request_retry_after_refresh", method=spec.method.value, url=spec.url)

        try:
            return await self._attempt(spec)
        except httpx.RequestError as e:
            self._logger.error(
                "http_request_failed",
                method=spec.method.value,
                url=spec.url,
                error=str(e),
            )
            raise RequestFailedError("Request failed after auth refresh", original=e) from e

    async def _attempt(self, spec: HttpCallSpec) -> NormalizedResponse:
        headers = self.build_headers(spec.headers)
        start = time.perf_counter()

        response = await self._client.request(
            spec.method.value,
            spec.url,
            headers=headers,
            **self._body_kwargs(spec.body, headers),
        )
        fallback_ms = (time.perf_counter() - start) * 1000

        body = self._decode_body(response)

        try:
            duration_ms = response.elapsed.total_seconds() * 1000
        except RuntimeError:
            # elapsed is only set once the transport closed the response
            duration_ms = fallback_ms

        self._logger.info(
            "http_request_completed",
            method=spec.method.value,
            url=spec.url,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        return NormalizedResponse(
            status=response.status_code,
            body=body,
            headers=dict(response.headers),
            duration_ms=duration_ms,
        )

    @staticmethod
    def _body_kwargs(body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        content_type = next((v for k, v in headers.items() if k.lower() == "content-type"), "")
        if "application/x-www-form-urlencoded" in content_type and isinstance(body, Mapping):
            return {"data": body}
        return {"json": body}

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        if "json" in response.headers.get("content-type", ""):
            try:
                return response.json()
            except ValueError as e:
                raise httpx.DecodingError(
                    f"Malformed JSON response body: {e}",
                    request=response.request,
                ) from e
        return response.text

    # ------------------------------------------------------------------
    # Convenience entry points
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str = "GET",
        url: str = "",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> NormalizedResponse:
        return await self.send(
            HttpCallSpec(method=HttpMethod(method.upper()), url=url, body=body, headers=dict(headers or {}))
        )

    async def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        return await self.request("GET", url, headers=headers)

    async def post(self, url: str, body: Any = None, headers: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        return await self.request("POST", url, body=body, headers=headers)

    async def put(self, url: str, body: Any = None, headers: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        return await self.request("PUT", url, body=body, headers=headers)

    async def patch(self, url: str, body: Any = None, headers: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        return await self.request("PATCH", url, body=body, headers=headers)

    async def delete(self, url: str, headers: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        return await self.request("DELETE", url, headers=headers)


__all__ = [
    "ApiClient",
    "DEFAULT_CONTENT_TYPE",
]
