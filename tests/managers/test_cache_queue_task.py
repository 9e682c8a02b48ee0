"""Tests for CacheManager, QueueManager and TaskManager."""

import json

import httpx
import pytest
import respx

from altogic_sdk import AltogicClient, ClientError
from altogic_sdk.managers.cache import CACHE_PATH
from altogic_sdk.managers.queue import QUEUE_PATH
from altogic_sdk.managers.task import TASK_PATH

from tests.conftest import BASE_URL

CACHE_URL = f"{BASE_URL}{CACHE_PATH}"


def sent_body(route: respx.Route) -> dict:
    return json.loads(route.calls.last.request.content)


class TestCacheManager:
    """Tests for cache operations."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get(self, client: AltogicClient):
        route = respx.get(CACHE_URL).mock(return_value=httpx.Response(200, json={"theme": "dark"}))
        result = await client.cache.get("prefs")
        assert result.data == {"theme": "dark"}
        assert route.calls.last.request.url.params["key"] == "prefs"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_unset_key(self, client: AltogicClient):
        """An empty body means the key is not set."""
        respx.get(CACHE_URL).mock(return_value=httpx.Response(200))
        result = await client.cache.get("missing")
        assert result.ok
        assert result.data is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_set_without_ttl(self, client: AltogicClient):
        route = respx.post(CACHE_URL).mock(return_value=httpx.Response(200))
        assert await client.cache.set("prefs", {"theme": "dark"}) is None
        assert sent_body(route) == {"key": "prefs", "value": {"theme": "dark"}}

    @pytest.mark.asyncio
    @respx.mock
    async def test_set_with_ttl(self, client: AltogicClient):
        route = respx.post(CACHE_URL).mock(return_value=httpx.Response(200))
        await client.cache.set("otp", "1234", ttl=60)
        assert sent_body(route)["ttl"] == 60

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete(self, client: AltogicClient):
        route = respx.delete(CACHE_URL).mock(return_value=httpx.Response(200))
        assert await client.cache.delete("prefs") is None
        assert sent_body(route) == {"keys": ["prefs"]}

    @pytest.mark.asyncio
    @respx.mock
    async def test_increment_and_decrement(self, client: AltogicClient):
        inc = respx.post(f"{CACHE_URL}/increment").mock(return_value=httpx.Response(200, json=5))
        dec = respx.post(f"{CACHE_URL}/decrement").mock(return_value=httpx.Response(200, json=3))
        assert (await client.cache.increment("visits", 5)).data == 5
        assert (await client.cache.decrement("visits", 2)).data == 3
        assert sent_body(inc) == {"key": "visits", "increment": 5}
        assert sent_body(dec) == {"key": "visits", "decrement": 2}

    @pytest.mark.asyncio
    @respx.mock
    async def test_expire(self, client: AltogicClient):
        route = respx.post(f"{CACHE_URL}/expire").mock(return_value=httpx.Response(200))
        assert await client.cache.expire("prefs", 30) is None
        assert sent_body(route) == {"key": "prefs", "ttl": 30}

    @pytest.mark.asyncio
    @respx.mock
    async def test_stats_and_list_keys(self, client: AltogicClient):
        respx.get(f"{CACHE_URL}/stats").mock(return_value=httpx.Response(200, json={"count": 2}))
        keys = respx.post(f"{CACHE_URL}/list-keys").mock(
            return_value=httpx.Response(200, json={"data": ["a", "b"], "next": None})
        )
        assert (await client.cache.get_stats()).data == {"count": 2}
        result = await client.cache.list_keys("a*", next_cursor="c1")
        assert result.data["data"] == ["a", "b"]
        assert sent_body(keys) == {"pattern": "a*", "next": "c1"}

    @pytest.mark.asyncio
    async def test_key_required(self, client: AltogicClient):
        with pytest.raises(ClientError):
            await client.cache.get("")


class TestQueueManager:
    """Tests for queue operations."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_submit_message(self, client: AltogicClient):
        route = respx.post(f"{BASE_URL}{QUEUE_PATH}").mock(
            return_value=httpx.Response(200, json={"messageId": "m1"})
        )
        result = await client.queue.submit_message("emails", {"to": "ada@example.com"})
        assert result.data == {"messageId": "m1"}
        assert sent_body(route) == {"queue": "emails", "message": {"to": "ada@example.com"}}

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_message_status(self, client: AltogicClient):
        route = respx.get(f"{BASE_URL}{QUEUE_PATH}/status").mock(
            return_value=httpx.Response(200, json={"status": "complete"})
        )
        result = await client.queue.get_message_status("m1")
        assert result.data["status"] == "complete"
        assert route.calls.last.request.url.params["messageId"] == "m1"


class TestTaskManager:
    """Tests for task operations."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_run_once(self, client: AltogicClient):
        route = respx.post(f"{BASE_URL}{TASK_PATH}").mock(return_value=httpx.Response(200, json={"taskId": "t1"}))
        result = await client.task.run_once("nightly-report")
        assert result.data == {"taskId": "t1"}
        assert sent_body(route) == {"task": "nightly-report"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_task_status(self, client: AltogicClient):
        route = respx.get(f"{BASE_URL}{TASK_PATH}/status").mock(
            return_value=httpx.Response(404, json={"errors": [{"code": "not_found", "message": "Unknown task"}]})
        )
        result = await client.task.get_task_status("t9")
        assert result.errors.status == 404
        assert route.calls.last.request.url.params["taskId"] == "t9"
