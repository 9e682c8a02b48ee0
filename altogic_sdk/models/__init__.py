"""Public Pydantic models for the Altogic SDK."""

from altogic_sdk.models.auth import Session, User, UserSession
from altogic_sdk.models.options import DEFAULT_OPTIONS, ClientOptions
from altogic_sdk.models.response import (
    APIError,
    APIResponse,
    ErrorEntry,
    ResolveType,
)
from altogic_sdk.models.storage import (
    DEFAULT_FILE_OPTIONS,
    BucketListOptions,
    FileListOptions,
    FileUploadOptions,
    SortEntry,
)

__all__ = [
    "APIError",
    "APIResponse",
    "BucketListOptions",
    "ClientOptions",
    "DEFAULT_FILE_OPTIONS",
    "DEFAULT_OPTIONS",
    "ErrorEntry",
    "FileListOptions",
    "FileUploadOptions",
    "ResolveType",
    "Session",
    "SortEntry",
    "User",
    "UserSession",
]
