"""Public exceptions for the Altogic SDK.

Remote and transport failures are reported through ``APIResponse.errors``
and never raised by the managers. These classes cover programmer misuse
and the opt-in ``APIResponse.raise_for_errors()`` path.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from altogic_sdk.models.response import APIError


class AltogicError(Exception):
    """Base exception for all Altogic SDK errors."""


class ClientError(AltogicError):
    """Configuration or usage error (bad env url, missing key, empty name)."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class AltogicAPIError(AltogicError):
    """Error returned by the Altogic API, raised on request."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: "APIError | None" = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error


class AltogicValidationError(AltogicError):
    """Validation error for request/response data."""
