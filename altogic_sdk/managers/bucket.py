"""Manager for a storage bucket."""

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
from altogic_sdk.managers.file import FileManager
from altogic_sdk.models.response import APIError, APIResponse, ResolveType
from altogic_sdk.models.storage import (
    DEFAULT_FILE_OPTIONS,
    FileListOptions,
    FileUploadOptions,
)

BUCKET_PATH = "/_api/rest/v1/storage/bucket"
ROOT_BUCKET = "root"


class BucketManager(APIBase):
    """Operations on one bucket, identified by name or id.

    Obtain instances with ``StorageManager.bucket`` or ``StorageManager.root``.
    The ``root`` bucket always exists and cannot be renamed or deleted.
    """

    def __init__(self, bucket_name_or_id: str, fetcher: Fetcher) -> None:
        super().__init__(fetcher)
        self._bucket_name_or_id = require(bucket_name_or_id, "bucket_name_or_id")

    @property
    def bucket_name_or_id(self) -> str:
        return self._bucket_name_or_id

    async def _call(
        self,
        action: str,
        resolve_type: ResolveType = ResolveType.JSON,
        **params: Any,
    ) -> APIResponse[Any]:
        body = compact(params)
        body["bucket"] = self._bucket_name_or_id
        return await self._fetcher.post(
            f"{BUCKET_PATH}/{action}",
            body=body,
            resolve_type=resolve_type,
        )

    async def _info(self, action: str, **params: Any) -> APIResponse[dict[str, Any]]:
        return require_payload(await self._call(action, **params))

    async def exists(self) -> APIResponse[bool]:
        """Check if the bucket exists. Data is False when it does not."""
        return to_bool(await self._call("exists"))

    async def get_info(self, detailed: bool = False) -> APIResponse[dict[str, Any]]:
        """Get bucket metadata; ``detailed`` adds file count and total size."""
        return await self._info("get", detailed=detailed)

    async def empty(self) -> APIError | None:
        """Delete every file in the bucket."""
        response = await self._call("empty", resolve_type=ResolveType.NONE)
        return response.errors

    async def rename(self, new_name: str) -> APIResponse[dict[str, Any]]:
        return await self._info("rename", newName=require(new_name, "new_name"))

    async def delete(self) -> APIError | None:
        """Delete the bucket and all its files."""
        response = await self._call("delete", resolve_type=ResolveType.NONE)
        return response.errors

    async def make_public(self, include_files: bool = False) -> APIResponse[dict[str, Any]]:
        """Make the bucket public, optionally every file in it too."""
        return await self._info("make-public", includeFiles=include_files)

    async def make_private(self, include_files: bool = False) -> APIResponse[dict[str, Any]]:
        """Make the bucket private, optionally every file in it too."""
        return await self._info("make-private", includeFiles=include_files)

    async def list_files(
        self,
        expression: str | None = None,
        options: FileListOptions | None = None,
    ) -> APIResponse[Any]:
        """List files, optionally filtered by a query expression.

        With ``options.return_count_info`` the data is ``{"info", "data"}``
        instead of a plain list.
        """
        return await self._call(
            "list-files",
            expression=expression,
            options=options.to_wire() if options is not None else None,
        )

    async def upload(
        self,
        file_name: str,
        file_body: bytes,
        options: FileUploadOptions | None = None,
    ) -> APIResponse[dict[str, Any]]:
        """Upload a file into this bucket. Returns the new file's metadata.

        Progress is reported through ``options.on_progress``.
        """
        require(file_name, "file_name")
        merged = DEFAULT_FILE_OPTIONS.merge(options)
        response = await self._fetcher.upload(
            f"{BUCKET_PATH}/upload-formdata",
            file_body,
            file_name,
            merged.content_type,
            query={
                "bucket": self._bucket_name_or_id,
                "fileName": file_name,
                "options": merged.to_wire(),
            },
            on_progress=merged.on_progress,
        )
        return require_payload(response)

    async def delete_files(self, file_names_or_ids: list[str]) -> APIError | None:
        """Delete several files of this bucket in one call."""
        response = await self._call(
            "delete-files",
            resolve_type=ResolveType.NONE,
            filenamesOrIds=list(file_names_or_ids),
        )
        return response.errors

    async def add_tags(self, tags: str | list[str]) -> APIResponse[dict[str, Any]]:
        return await self._info("add-tags", tags=as_list(tags))

    async def remove_tags(self, tags: str | list[str]) -> APIResponse[dict[str, Any]]:
        return await self._info("remove-tags", tags=as_list(tags))

    def file(self, file_name_or_id: str) -> FileManager:
        """Return a manager for a file of this bucket. No request is made."""
        return FileManager(self._bucket_name_or_id, file_name_or_id, self._fetcher)
