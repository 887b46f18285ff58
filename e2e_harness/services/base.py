"""Resource service base: REST verbs on one fixed collection path."""

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from e2e_harness.http.client import ApiClient
from e2e_harness.http.types import NormalizedResponse

ResourceId = Union[int, str]


class ResourceService:
    """Maps list/get/create/update/remove onto ApiClient calls.

    Subclasses set ``path`` (e.g. "/api/users"). No retries and no
    validation beyond building the URL.
    """

    path: str = ""

    def __init__(self, client: ApiClient, path: Optional[str] = None):
        self._client = client
        if path is not None:
            self.path = path
        if not self.path:
            raise ValueError(f"{type(self).__name__} requires a resource path")

    def item_url(self, resource_id: ResourceId) -> str:
        return f"{self.path}/{resource_id}"

    def list_url(self, params: Optional[Mapping[str, Any]] = None) -> str:
        if not params:
            return self.path
        query = urlencode({key: str(value) for key, value in params.items()})
        return f"{self.path}?{query}"

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> NormalizedResponse:
        return await self._client.get(self.list_url(params))

    async def get(self, resource_id: ResourceId) -> NormalizedResponse:
        return await self._client.get(self.item_url(resource_id))

    async def create(self, payload: Any) -> NormalizedResponse:
        return await self._client.post(self.path, payload)

    async def update(self, resource_id: ResourceId, payload: Any) -> NormalizedResponse:
        return await self._client.put(self.item_url(resource_id), payload)

    async def remove(self, resource_id: ResourceId) -> NormalizedResponse:
        return await self._client.delete(self.item_url(resource_id))


__all__ = ["ResourceService", "ResourceId"]
