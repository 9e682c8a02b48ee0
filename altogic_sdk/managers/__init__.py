"""Resource managers.

Each manager groups related remote operations behind typed async methods and
shares the client's single fetcher.
"""

from altogic_sdk.managers.auth import AuthManager
from altogic_sdk.managers.base import APIBase
from altogic_sdk.managers.bucket import BucketManager
from altogic_sdk.managers.cache import CacheManager
from altogic_sdk.managers.database import DatabaseManager, ObjectManager, QueryBuilder
from altogic_sdk.managers.endpoint import EndpointManager
from altogic_sdk.managers.file import FileManager
from altogic_sdk.managers.queue import QueueManager
from altogic_sdk.managers.storage import StorageManager
from altogic_sdk.managers.task import TaskManager

__all__ = [
    "APIBase",
    "AuthManager",
    "BucketManager",
    "CacheManager",
    "DatabaseManager",
    "EndpointManager",
    "FileManager",
    "ObjectManager",
    "QueryBuilder",
    "QueueManager",
    "StorageManager",
    "TaskManager",
]
