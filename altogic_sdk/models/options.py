"""Client configuration options."""

import httpx
from pydantic import BaseModel, ConfigDict, Field

from altogic_sdk._internal.http import DEFAULT_TIMEOUT
from altogic_sdk.local_storage import ClientStorage


class ClientOptions(BaseModel):
    """Optional settings for ``AltogicClient``.

    Fields:
        api_key: Sent as the ``Authorization`` header on every request.
        signing_key: When set, every request carries ``X-Timestamp`` and an
            HMAC-SHA256 ``X-Signature`` computed with this key.
        local_storage: Where the auth manager persists session and user.
        timeout: Default request timeout in seconds.
        debug: Print request/response debug lines to stderr.
        transport: Custom httpx transport (mock transports in tests).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_key: str | None = None
    signing_key: str | None = None
    local_storage: ClientStorage | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False
    transport: httpx.AsyncBaseTransport | None = None

    def merge(self, overrides: "ClientOptions | None") -> "ClientOptions":
        """Return new options where fields explicitly set on ``overrides`` win.

        Neither ``self`` nor ``overrides`` is modified.
        """
        if overrides is None:
            return self
        update = {name: getattr(overrides, name) for name in overrides.model_fields_set}
        return self.model_copy(update=update)


DEFAULT_OPTIONS = ClientOptions()
