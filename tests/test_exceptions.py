"""Tests for public exceptions."""

import pytest

from altogic_sdk.exceptions import (
    AltogicAPIError,
    AltogicError,
    AltogicValidationError,
    ClientError,
)
from altogic_sdk.models.response import APIError


class TestAltogicError:
    """Tests for base AltogicError."""

    def test_is_exception(self):
        """AltogicError should be an Exception."""
        assert issubclass(AltogicError, Exception)

    def test_can_be_raised(self):
        """AltogicError should be raisable with message."""
        with pytest.raises(AltogicError) as exc_info:
            raise AltogicError("test error")
        assert str(exc_info.value) == "test error"


class TestClientError:
    """Tests for ClientError."""

    def test_inherits_from_altogic_error(self):
        """ClientError should inherit from AltogicError."""
        assert issubclass(ClientError, AltogicError)

    def test_carries_code(self):
        """Should keep the machine-readable code next to the message."""
        error = ClientError("missing_required_value", "env_url is a required parameter")
        assert error.code == "missing_required_value"
        assert str(error) == "env_url is a required parameter"


class TestAltogicAPIError:
    """Tests for AltogicAPIError."""

    def test_inherits_from_altogic_error(self):
        """AltogicAPIError should inherit from AltogicError."""
        assert issubclass(AltogicAPIError, AltogicError)

    def test_with_message_only(self):
        """Should create error with message only."""
        error = AltogicAPIError("API request failed")
        assert str(error) == "API request failed"
        assert error.status_code is None
        assert error.error is None

    def test_with_status_code_and_error(self):
        """Should store status code and the normalized error."""
        api_error = APIError.local("not_found", "Not found", status=404)
        error = AltogicAPIError("Not found", status_code=404, error=api_error)
        assert error.status_code == 404
        assert error.error is api_error

    def test_can_be_caught_as_altogic_error(self):
        """Should be catchable as AltogicError."""
        with pytest.raises(AltogicError):
            raise AltogicAPIError("API error", status_code=500)


class TestAltogicValidationError:
    """Tests for AltogicValidationError."""

    def test_inherits_from_altogic_error(self):
        """AltogicValidationError should inherit from AltogicError."""
        assert issubclass(AltogicValidationError, AltogicError)

    def test_can_be_raised(self):
        """Should be raisable with message."""
        with pytest.raises(AltogicValidationError) as exc_info:
            raise AltogicValidationError("Response body is not valid JSON")
        assert str(exc_info.value) == "Response body is not valid JSON"
