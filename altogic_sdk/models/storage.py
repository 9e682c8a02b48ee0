"""Option models for storage calls."""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Constants
# =============================================================================

DEFAULT_CONTENT_TYPE = "text/plain;charset=UTF-8"

ProgressCallback = Callable[[int, int], Any]
SortDirection = Literal["asc", "desc"]

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    arbitrary_types_allowed=True,
)


class _WireOptions(BaseModel):
    model_config = _WIRE_CONFIG

    def to_wire(self) -> dict[str, Any]:
        """Serialize to camelCase, leaving out unset (None) fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Upload
# =============================================================================


class FileUploadOptions(_WireOptions):
    """Options for uploading or replacing a file.

    ``on_progress`` is called with ``(bytes_sent, total_bytes)`` while the
    body streams; it is never sent to the server. If ``is_public`` is not
    set, the bucket's privacy setting applies.
    """

    content_type: str = DEFAULT_CONTENT_TYPE
    is_public: bool | None = None
    create_bucket: bool = False
    tags: list[str] | None = None
    on_progress: ProgressCallback | None = Field(default=None, exclude=True)

    def merge(self, overrides: "FileUploadOptions | None") -> "FileUploadOptions":
        if overrides is None:
            return self
        update = {name: getattr(overrides, name) for name in overrides.model_fields_set}
        return self.model_copy(update=update)


DEFAULT_FILE_OPTIONS = FileUploadOptions()


# =============================================================================
# Listing
# =============================================================================


class SortEntry(_WireOptions):
    field: str
    direction: SortDirection = "asc"


class FileListOptions(_WireOptions):
    """Pagination and sorting for file listings and searches."""

    limit: int | None = Field(default=None, ge=1)
    page: int | None = Field(default=None, ge=1)
    return_count_info: bool | None = None
    sort: SortEntry | None = None


class BucketListOptions(FileListOptions):
    """Pagination and sorting for bucket listings.

    ``detailed`` also returns the file count and total size of each bucket.
    """

    detailed: bool | None = None
