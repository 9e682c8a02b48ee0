"""Manager for the app's custom endpoints."""

from collections.abc import Mapping
from typing import Any

from altogic_sdk.managers.base import APIBase, require
from altogic_sdk.models.response import APIResponse, ResolveType


class EndpointManager(APIBase):
    """Make HTTP requests to the app's endpoints and run their services.

    Paths are relative to the environment URL. A leading slash is added when
    missing. The data of each response is whatever the endpoint returns,
    parsed per ``resolve_type``.
    """

    async def _call(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        resolve_type: ResolveType = ResolveType.JSON,
        timeout: float | None = None,
    ) -> APIResponse[Any]:
        path = require(path, "path").strip()
        if not path.startswith("/"):
            path = f"/{path}"
        return await self._fetcher.send(
            method,
            path,
            body=body,
            query=query,
            headers=headers,
            resolve_type=resolve_type,
            timeout=timeout,
        )

    async def get(self, path: str, **kwargs: Any) -> APIResponse[Any]:
        """GET request. Accepts ``query``, ``headers``, ``resolve_type``, ``timeout``."""
        return await self._call("GET", path, **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> APIResponse[Any]:
        return await self._call("POST", path, body=body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> APIResponse[Any]:
        return await self._call("PUT", path, body=body, **kwargs)

    async def delete(self, path: str, body: Any = None, **kwargs: Any) -> APIResponse[Any]:
        return await self._call("DELETE", path, body=body, **kwargs)
