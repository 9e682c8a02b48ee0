"""Manager for a single file in a storage bucket."""

from typing import Any

from altogic_sdk._internal.fetcher import Fetcher
from altogic_sdk.managers.base import (
    APIBase,
    as_list,
    compact,
    require,
    require_payload,
    to_bool,
)
from altogic_sdk.models.response import APIError, APIResponse, ResolveType
from altogic_sdk.models.storage import DEFAULT_FILE_OPTIONS, FileUploadOptions

FILE_PATH = "/_api/rest/v1/storage/bucket/file"
REPLACE_PATH = "/_api/rest/v1/storage/bucket/replace-formdata"


class FileManager(APIBase):
    """Operations on one file, identified by bucket and file name or id.

    Obtain instances with ``BucketManager.file``. The manager keeps no server
    state; create as many as needed.

    If the client key enforces sessions, every call requires a signed-in user.
    """

    def __init__(self, bucket_name_or_id: str, file_name_or_id: str, fetcher: Fetcher) -> None:
        super().__init__(fetcher)
        self._bucket_name_or_id = require(bucket_name_or_id, "bucket_name_or_id")
        self._file_name_or_id = require(file_name_or_id, "file_name_or_id")

    @property
    def bucket_name_or_id(self) -> str:
        return self._bucket_name_or_id

    @property
    def file_name_or_id(self) -> str:
        return self._file_name_or_id

    async def _call(
        self,
        action: str,
        resolve_type: ResolveType = ResolveType.JSON,
        **params: Any,
    ) -> APIResponse[Any]:
        body = compact(params)
        body["file"] = self._file_name_or_id
        body["bucket"] = self._bucket_name_or_id
        return await self._fetcher.post(
            f"{FILE_PATH}/{action}",
            body=body,
            resolve_type=resolve_type,
        )

    async def _info(self, action: str, **params: Any) -> APIResponse[dict[str, Any]]:
        return require_payload(await self._call(action, **params))

    async def exists(self) -> APIResponse[bool]:
        """Check if the file exists. Data is False when it does not."""
        return to_bool(await self._call("exists"))

    async def get_info(self) -> APIResponse[dict[str, Any]]:
        """Get the file metadata."""
        return await self._info("get")

    async def make_public(self) -> APIResponse[dict[str, Any]]:
        """Make the file publicly readable. Returns the updated file info."""
        return await self._info("make-public")

    async def make_private(self) -> APIResponse[dict[str, Any]]:
        """Make the file private. Returns the updated file info."""
        return await self._info("make-private")

    async def download(self) -> APIResponse[bytes]:
        """Download the file contents as raw bytes."""
        return await self._call("download", resolve_type=ResolveType.BINARY)

    async def rename(self, new_name: str) -> APIResponse[dict[str, Any]]:
        """Rename the file. Returns the updated file info."""
        return await self._info("rename", newName=require(new_name, "new_name"))

    async def duplicate(self, duplicate_name: str | None = None) -> APIResponse[dict[str, Any]]:
        """Duplicate the file within its bucket.

        If ``duplicate_name`` is not given, the server derives a unique name
        from the current file name.
        """
        return await self._info("duplicate", duplicateName=duplicate_name)

    async def delete(self) -> APIError | None:
        """Delete the file. Returns the error, or None on success."""
        response = await self._call("delete", resolve_type=ResolveType.NONE)
        return response.errors

    async def replace(
        self,
        file_body: bytes,
        options: FileUploadOptions | None = None,
    ) -> APIResponse[dict[str, Any]]:
        """Replace the file contents, keeping its name.

        Size, encoding and mime type are taken from the new upload. Progress
        is reported through ``options.on_progress``.
        """
        merged = DEFAULT_FILE_OPTIONS.merge(options)
        response = await self._fetcher.upload(
            REPLACE_PATH,
            file_body,
            self._file_name_or_id,
            merged.content_type,
            query={
                "bucket": self._bucket_name_or_id,
                "fileName": self._file_name_or_id,
                "options": merged.to_wire(),
            },
            on_progress=merged.on_progress,
        )
        return require_payload(response)

    async def move_to(self, bucket_name_or_id: str) -> APIResponse[dict[str, Any]]:
        """Move the file to another bucket, renaming it if the name is taken."""
        return await self._info(
            "move", bucketNameOrId=require(bucket_name_or_id, "bucket_name_or_id")
        )

    async def copy_to(self, bucket_name_or_id: str) -> APIResponse[dict[str, Any]]:
        """Copy the file to another bucket, renaming it if the name is taken."""
        return await self._info(
            "copy", bucketNameOrId=require(bucket_name_or_id, "bucket_name_or_id")
        )

    async def add_tags(self, tags: str | list[str]) -> APIResponse[dict[str, Any]]:
        return await self._info("add-tags", tags=as_list(tags))

    async def remove_tags(self, tags: str | list[str]) -> APIResponse[dict[str, Any]]:
        return await self._info("remove-tags", tags=as_list(tags))