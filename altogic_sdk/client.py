"""AltogicClient, the entry point of the SDK.

Example usage:
    from altogic_sdk import AltogicClient

    async with AltogicClient(
        env_url="https://c1-na.altogic.com/e:62863f06bb75ed002ed0f207",
        client_key="5ad8526dbd014613a8dbeff60daa7c26",
    ) as client:
        result = await client.auth.sign_in_with_email("user@example.com", "secret")
        if result.errors is None:
            print(result.data.user)

        info = await client.storage.bucket("images").file("cat.png").get_info()
"""

import os
import threading
from typing import TypeVar
from urllib.parse import urlsplit

from altogic_sdk._internal.fetcher import Fetcher, default_headers
from altogic_sdk._internal.http import DEFAULT_TIMEOUT
from altogic_sdk.exceptions import ClientError
from altogic_sdk.managers import (
    APIBase,
    AuthManager,
    CacheManager,
    DatabaseManager,
    EndpointManager,
    QueueManager,
    StorageManager,
    TaskManager,
)
from altogic_sdk.models.auth import Session
from altogic_sdk.models.options import DEFAULT_OPTIONS, ClientOptions

M = TypeVar("M", bound=APIBase)


def normalize_url(env_url: str) -> str:
    """Validate an environment URL and strip surrounding space and trailing slashes.

    Raises:
        ClientError: If the URL is missing or not an absolute http(s) URL.
    """
    if not isinstance(env_url, str) or not env_url.strip():
        raise ClientError(
            "missing_required_value",
            "env_url is a required parameter and needs to start with https://",
        )
    url = env_url.strip()
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ClientError(
            "invalid_value",
            f"env_url needs to be an absolute http:// or https:// URL, got {url!r}",
        )
    return url.rstrip("/")


class AltogicClient:
    """Client for one Altogic app environment.

    Commands are grouped by manager:

    * ``auth`` - users and sessions
    * ``endpoint`` - requests to the app's endpoints
    * ``db`` - database queries and objects
    * ``cache`` - key/value cache
    * ``queue`` - message queues
    * ``task`` - scheduled tasks
    * ``storage`` - buckets and files

    A client talks to a single environment; create one client per
    environment. All managers share one fetcher, so a session installed by
    ``auth`` applies to every manager.
    """

    def __init__(
        self,
        env_url: str,
        client_key: str,
        settings: ClientOptions | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            env_url: Base URL of the app environment.
            client_key: Client library key of the app.
            settings: Optional settings merged over the defaults.

        Raises:
            ClientError: If ``env_url`` is not an absolute http(s) URL or
                ``client_key`` is empty. No request has been made.
        """
        self._env_url = normalize_url(env_url)
        if not isinstance(client_key, str) or not client_key.strip():
            raise ClientError("missing_required_value", "client_key is a required parameter")

        self._settings = DEFAULT_OPTIONS.merge(settings)
        self._fetcher = Fetcher(
            self._env_url,
            default_headers(client_key, self._settings.api_key),
            signing_key=self._settings.signing_key,
            timeout=self._settings.timeout,
            debug=self._settings.debug,
            transport=self._settings.transport,
        )
        self._managers: dict[type[APIBase], APIBase] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, settings: ClientOptions | None = None) -> "AltogicClient":
        """Create a client from environment variables.

        Required environment variables:
            ALTOGIC_ENV_URL: The app environment URL.
            ALTOGIC_CLIENT_KEY: The client library key.

        Optional environment variables:
            ALTOGIC_API_KEY: API key sent as the Authorization header.
            ALTOGIC_SIGNING_KEY: Key used to sign requests.
            ALTOGIC_TIMEOUT_MS: Request timeout in milliseconds.
            ALTOGIC_DEBUG: Set to "1" to enable debug logging.

        Explicit ``settings`` win over the environment.

        Raises:
            ClientError: If a required variable is missing or invalid.
            ValueError: If ALTOGIC_TIMEOUT_MS is not an integer.
        """
        env_settings = ClientOptions(
            api_key=os.environ.get("ALTOGIC_API_KEY"),
            signing_key=os.environ.get("ALTOGIC_SIGNING_KEY"),
            timeout=int(os.environ.get("ALTOGIC_TIMEOUT_MS", str(int(DEFAULT_TIMEOUT * 1000)))) / 1000,
            debug=os.environ.get("ALTOGIC_DEBUG", "") == "1",
        )
        return cls(
            env_url=os.environ.get("ALTOGIC_ENV_URL", ""),
            client_key=os.environ.get("ALTOGIC_CLIENT_KEY", ""),
            settings=env_settings.merge(settings),
        )

    @property
    def env_url(self) -> str:
        return self._env_url

    @property
    def settings(self) -> ClientOptions:
        return self._settings

    @property
    def fetcher(self) -> Fetcher:
        return self._fetcher

    def _manager(self, manager_type: type[M], *args: object) -> M:
        """Return the cached manager of ``manager_type``, creating it once."""
        with self._lock:
            manager = self._managers.get(manager_type)
            if manager is None:
                manager = manager_type(self._fetcher, *args)
                self._managers[manager_type] = manager
        return manager  # type: ignore[return-value]

    @property
    def auth(self) -> AuthManager:
        return self._manager(AuthManager, self._settings.local_storage)

    @property
    def endpoint(self) -> EndpointManager:
        return self._manager(EndpointManager)

    @property
    def db(self) -> DatabaseManager:
        return self._manager(DatabaseManager)

    @property
    def cache(self) -> CacheManager:
        return self._manager(CacheManager)

    @property
    def queue(self) -> QueueManager:
        return self._manager(QueueManager)

    @property
    def task(self) -> TaskManager:
        return self._manager(TaskManager)

    @property
    def storage(self) -> StorageManager:
        return self._manager(StorageManager)

    def restore_local_auth_session(self) -> Session | None:
        """Install the session persisted in local storage, if there is one.

        Call before the first authenticated request. Returns the restored
        session.
        """
        session = self.auth.get_session()
        if session is not None:
            self._fetcher.set_session(session)
        return session

    async def close(self) -> None:
        await self._fetcher.close()

    async def __aenter__(self) -> "AltogicClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def create_client(
    env_url: str,
    client_key: str,
    settings: ClientOptions | None = None,
) -> AltogicClient:
    """Create a new client. See ``AltogicClient``."""
    return AltogicClient(env_url, client_key, settings)
