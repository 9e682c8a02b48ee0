"""Result envelope returned by every SDK call.

Every manager method resolves to an ``APIResponse``: either ``data`` with no
``errors``, or ``errors`` with no ``data``. Callers check ``errors`` (or
``ok``) before trusting ``data``.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from altogic_sdk.exceptions import AltogicAPIError, AltogicValidationError

T = TypeVar("T")

# =============================================================================
# Constants
# =============================================================================

CLIENT_ERROR_ORIGIN = "client_error"
SERVER_ERROR_ORIGIN = "server_error"

NETWORK_ERROR = "network_error"
REQUEST_TIMEOUT = "request_timeout"
INVALID_RESPONSE_BODY = "invalid_response_body"
HTTP_ERROR = "http_error"


class ResolveType(str, Enum):
    """How the fetcher parses a successful response body.

    Declared per call, never inferred from the response content type.
    """

    JSON = "json"
    BINARY = "binary"
    TEXT = "text"
    NONE = "none"


# =============================================================================
# Error Models
# =============================================================================


class ErrorEntry(BaseModel):
    """A single error item, as reported by the server or synthesized locally."""

    origin: str = SERVER_ERROR_ORIGIN
    code: str = HTTP_ERROR
    message: str
    details: Any = None

    model_config = {"extra": "ignore"}


class APIError(BaseModel):
    """Normalized failure of one call.

    ``items`` is ordered with the most specific cause first. ``status`` is the
    HTTP status code, or 0 when the request never produced a response.
    """

    status: int
    status_text: str = ""
    items: list[ErrorEntry] = Field(min_length=1)

    @property
    def code(self) -> str:
        return self.items[0].code

    @property
    def message(self) -> str:
        return self.items[0].message

    @classmethod
    def local(
        cls,
        code: str,
        message: str,
        *,
        status: int = 0,
        status_text: str = "",
        details: Any = None,
    ) -> "APIError":
        """Build a synthetic error for failures detected on the client side."""
        return cls(
            status=status,
            status_text=status_text,
            items=[
                ErrorEntry(
                    origin=CLIENT_ERROR_ORIGIN,
                    code=code,
                    message=message,
                    details=details,
                )
            ],
        )

    @classmethod
    def from_body(cls, status: int, status_text: str, body: Any) -> "APIError":
        """Build an error from a decoded error response body.

        Accepts ``{"errors": [...]}``, ``{"errors": {"items": [...]}}``,
        ``{"items": [...]}`` or a bare list. Entries without a ``message`` are
        skipped and a missing ``code`` defaults to ``http_error``. If nothing
        usable is left a single local ``http_error`` entry is substituted.
        """
        entries: list[ErrorEntry] = []
        for raw in _error_items(body):
            try:
                entries.append(ErrorEntry.model_validate(raw))
            except ValidationError:
                continue

        if not entries:
            return cls.local(
                HTTP_ERROR,
                status_text or f"Request failed with status {status}",
                status=status,
                status_text=status_text,
            )
        return cls(status=status, status_text=status_text, items=entries)


def _error_items(body: Any) -> list[Any]:
    if isinstance(body, list):
        return body
    if not isinstance(body, dict):
        return []
    errors = body.get("errors", body)
    if isinstance(errors, dict):
        errors = errors.get("items")
    return errors if isinstance(errors, list) else []


# =============================================================================
# Envelope
# =============================================================================


class APIResponse(BaseModel, Generic[T]):
    """Outcome of one remote call.

    A successful call may still carry ``data=None``: calls declared with
    ``ResolveType.NONE``, and JSON calls answered with an empty body (for
    example a 204). Managers whose operations must return a payload turn an
    empty success into an ``invalid_response_body`` error.
    """

    data: T | None = None
    errors: APIError | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def data_or_errors(self) -> "APIResponse[T]":
        if self.errors is not None and self.data is not None:
            raise ValueError("a failed response cannot carry data")
        return self

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.errors is None

    @classmethod
    def success(cls, data: Any = None) -> "APIResponse[Any]":
        return cls(data=data)

    @classmethod
    def failure(cls, errors: APIError) -> "APIResponse[Any]":
        return cls(errors=errors)

    def raise_for_errors(self) -> T | None:
        """Return ``data``, or raise if the call failed.

        Raises:
            AltogicValidationError: The response body did not match the
                declared resolve type or model.
            AltogicAPIError: Any other failure.
        """
        if self.errors is not None:
            if self.errors.code == INVALID_RESPONSE_BODY:
                raise AltogicValidationError(self.errors.message)
            raise AltogicAPIError(
                self.errors.message,
                status_code=self.errors.status or None,
                error=self.errors,
            )
        return self.data
