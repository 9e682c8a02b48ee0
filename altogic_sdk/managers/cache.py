"""Manager for the app's key/value cache."""

from typing import Any

from altogic_sdk.managers.base import APIBase, as_list, compact, require
from altogic_sdk.models.response import APIError, APIResponse, ResolveType

CACHE_PATH = "/_api/rest/v1/cache"


class CacheManager(APIBase):
    """Store and manage values in the app's cache.

    Values are JSON-serializable. ``ttl`` is in seconds; without it an entry
    does not expire.
    """

    async def get(self, key: str) -> APIResponse[Any]:
        """Get the value stored at ``key``. Data is None when the key is unset."""
        return await self._fetcher.get(CACHE_PATH, query={"key": require(key, "key")})

    async def set(self, key: str, value: Any, ttl: int | None = None) -> APIError | None:
        """Store ``value`` at ``key``, replacing any existing value."""
        response = await self._fetcher.post(
            CACHE_PATH,
            body=compact({"key": require(key, "key"), "value": value, "ttl": ttl}),
            resolve_type=ResolveType.NONE,
        )
        return response.errors

    async def delete(self, keys: str | list[str]) -> APIError | None:
        """Remove one or more keys."""
        response = await self._fetcher.delete(
            CACHE_PATH,
            body={"keys": as_list(keys)},
            resolve_type=ResolveType.NONE,
        )
        return response.errors

    async def increment(self, key: str, increment: int = 1, ttl: int | None = None) -> APIResponse[int]:
        """Increment the number at ``key``; a missing key starts at 0."""
        return await self._fetcher.post(
            f"{CACHE_PATH}/increment",
            body=compact({"key": require(key, "key"), "increment": increment, "ttl": ttl}),
        )

    async def decrement(self, key: str, decrement: int = 1, ttl: int | None = None) -> APIResponse[int]:
        """Decrement the number at ``key``; a missing key starts at 0."""
        return await self._fetcher.post(
            f"{CACHE_PATH}/decrement",
            body=compact({"key": require(key, "key"), "decrement": decrement, "ttl": ttl}),
        )

    async def expire(self, key: str, ttl: int) -> APIError | None:
        """Set a time-to-live on an existing key."""
        response = await self._fetcher.post(
            f"{CACHE_PATH}/expire",
            body={"key": require(key, "key"), "ttl": ttl},
            resolve_type=ResolveType.NONE,
        )
        return response.errors

    async def get_stats(self) -> APIResponse[dict[str, Any]]:
        return await self._fetcher.get(f"{CACHE_PATH}/stats")

    async def list_keys(self, pattern: str | None = None, next_cursor: str | None = None) -> APIResponse[dict[str, Any]]:
        """List keys matching ``pattern``. Pass the returned cursor to page on."""
        return await self._fetcher.post(
            f"{CACHE_PATH}/list-keys",
            body=compact({"pattern": pattern, "next": next_cursor}),
        )
