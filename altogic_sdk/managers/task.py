"""Manager for the app's scheduled tasks."""

from typing import Any

from altogic_sdk.managers.base import APIBase, require
from altogic_sdk.models.response import APIResponse

TASK_PATH = "/_api/rest/v1/task"


class TaskManager(APIBase):
    """Trigger scheduled tasks (cron jobs) manually and follow their runs."""

    async def run_once(self, task_name_or_id: str) -> APIResponse[dict[str, Any]]:
        """Queue one run of the task. Data holds the task id of the run."""
        return await self._fetcher.post(
            TASK_PATH,
            body={"task": require(task_name_or_id, "task_name_or_id")},
        )

    async def get_task_status(self, task_id: str) -> APIResponse[dict[str, Any]]:
        return await self._fetcher.get(
            f"{TASK_PATH}/status",
            query={"taskId": require(task_id, "task_id")},
        )
