"""Manager for the app's cloud storage."""

from typing import Any

from altogic_sdk.managers.base import APIBase, compact, require
from altogic_sdk.managers.bucket import ROOT_BUCKET, BucketManager
from altogic_sdk.models.response import APIError, APIResponse, ResolveType
from altogic_sdk.models.storage import BucketListOptions, FileListOptions

STORAGE_PATH = "/_api/rest/v1/storage"


class StorageManager(APIBase):
    """Buckets and files of the app's cloud storage."""

    def bucket(self, bucket_name_or_id: str) -> BucketManager:
        """Return a manager for a bucket. No request is made."""
        return BucketManager(bucket_name_or_id, self._fetcher)

    @property
    def root(self) -> BucketManager:
        """The default ``root`` bucket."""
        return BucketManager(ROOT_BUCKET, self._fetcher)

    async def create_bucket(
        self,
        name: str,
        is_public: bool = True,
        tags: list[str] | None = None,
    ) -> APIResponse[dict[str, Any]]:
        """Create a bucket. Names must be unique within the app."""
        return await self._fetcher.post(
            f"{STORAGE_PATH}/create-bucket",
            body=compact({"name": require(name, "name"), "isPublic": is_public, "tags": tags}),
        )

    async def list_buckets(
        self,
        expression: str | None = None,
        options: BucketListOptions | None = None,
    ) -> APIResponse[Any]:
        """List buckets, optionally filtered by a query expression."""
        return await self._fetcher.post(
            f"{STORAGE_PATH}/list-buckets",
            body=compact({
                "expression": expression,
                "options": options.to_wire() if options is not None else None,
            }),
        )

    async def search_files(
        self,
        expression: str,
        options: FileListOptions | None = None,
    ) -> APIResponse[Any]:
        """Search files across all buckets."""
        return await self._fetcher.post(
            f"{STORAGE_PATH}/search-files",
            body=compact({
                "expression": require(expression, "expression"),
                "options": options.to_wire() if options is not None else None,
            }),
        )

    async def get_stats(self) -> APIResponse[dict[str, Any]]:
        """Storage usage: object count, total size, bucket count."""
        return await self._fetcher.get(f"{STORAGE_PATH}/stats")

    async def delete_file(self, file_url: str) -> APIError | None:
        """Delete a file by its public URL."""
        response = await self._fetcher.post(
            f"{STORAGE_PATH}/delete-file",
            body={"fileUrl": require(file_url, "file_url")},
            resolve_type=ResolveType.NONE,
        )
        return response.errors
