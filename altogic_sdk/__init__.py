"""Altogic SDK for Python.

Async client for backend apps built on the Altogic platform.

Public API:
    AltogicClient - Client for one app environment
    create_client - Convenience constructor
    ClientOptions - Client settings
    APIResponse, APIError - Result envelope of every call

Internal (not for direct use):
    _internal.fetcher - Shared request dispatcher
"""

from altogic_sdk._version import __version__
from altogic_sdk.client import AltogicClient, create_client
from altogic_sdk.exceptions import (
    AltogicAPIError,
    AltogicError,
    AltogicValidationError,
    ClientError,
)
from altogic_sdk.local_storage import ClientStorage, MemoryStorage
from altogic_sdk.models import (
    APIError,
    APIResponse,
    ClientOptions,
    ErrorEntry,
    FileUploadOptions,
    ResolveType,
    Session,
    User,
    UserSession,
)

__all__ = [
    "__version__",
    "AltogicClient",
    "create_client",
    "AltogicAPIError",
    "AltogicError",
    "AltogicValidationError",
    "ClientError",
    "ClientStorage",
    "MemoryStorage",
    "APIError",
    "APIResponse",
    "ClientOptions",
    "ErrorEntry",
    "FileUploadOptions",
    "ResolveType",
    "Session",
    "User",
    "UserSession",
]
