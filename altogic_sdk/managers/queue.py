"""Manager for the app's message queues."""

from typing import Any

from altogic_sdk.managers.base import APIBase, require
from altogic_sdk.models.response import APIResponse

QUEUE_PATH = "/_api/rest/v1/queue"


class QueueManager(APIBase):
    """Submit messages to queues for asynchronous processing by the app."""

    async def submit_message(self, queue_name_or_id: str, message: Any) -> APIResponse[dict[str, Any]]:
        """Submit a message. Data holds the message id used for status checks."""
        return await self._fetcher.post(
            QUEUE_PATH,
            body={"queue": require(queue_name_or_id, "queue_name_or_id"), "message": message},
        )

    async def get_message_status(self, message_id: str) -> APIResponse[dict[str, Any]]:
        """Status of a submitted message (pending, processing, complete, errors)."""
        return await self._fetcher.get(
            f"{QUEUE_PATH}/status",
            query={"messageId": require(message_id, "message_id")},
        )
