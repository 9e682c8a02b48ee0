"""Tests for the result envelope models."""

import pytest
from pydantic import ValidationError

from altogic_sdk.exceptions import AltogicAPIError, AltogicValidationError
from altogic_sdk.models.response import (
    CLIENT_ERROR_ORIGIN,
    HTTP_ERROR,
    INVALID_RESPONSE_BODY,
    SERVER_ERROR_ORIGIN,
    APIError,
    APIResponse,
    ResolveType,
)


class TestAPIError:
    """Tests for APIError construction."""

    def test_local_error(self):
        """Should build a single client-side entry."""
        error = APIError.local("network_error", "connection refused")
        assert error.status == 0
        assert error.code == "network_error"
        assert error.message == "connection refused"
        assert error.items[0].origin == CLIENT_ERROR_ORIGIN

    def test_requires_at_least_one_item(self):
        """Should reject an error without items."""
        with pytest.raises(ValidationError):
            APIError(status=500, items=[])

    def test_from_body_errors_list(self):
        """Should keep server entries in order."""
        body = {
            "errors": [
                {"origin": "client_error", "code": "validation_error", "message": "name is required", "details": {"field": "name"}},
                {"code": "second", "message": "second cause"},
            ]
        }
        error = APIError.from_body(400, "Bad Request", body)
        assert error.status == 400
        assert error.status_text == "Bad Request"
        assert [item.code for item in error.items] == ["validation_error", "second"]
        assert error.items[0].details == {"field": "name"}
        assert error.items[1].origin == SERVER_ERROR_ORIGIN

    def test_from_body_nested_items(self):
        """Should accept errors wrapped in an items object."""
        body = {"errors": {"status": 404, "items": [{"code": "not_found", "message": "missing"}]}}
        error = APIError.from_body(404, "Not Found", body)
        assert error.code == "not_found"

    def test_from_body_top_level_items(self):
        """Should accept a top-level items list."""
        error = APIError.from_body(409, "Conflict", {"items": [{"code": "conflict", "message": "exists"}]})
        assert error.code == "conflict"

    def test_from_body_bare_list(self):
        """Should accept a bare list of entries."""
        error = APIError.from_body(403, "Forbidden", [{"code": "forbidden", "message": "no access"}])
        assert error.code == "forbidden"

    def test_from_body_missing_body(self):
        """Should substitute a local entry when there is no body."""
        error = APIError.from_body(502, "Bad Gateway", None)
        assert error.status == 502
        assert error.code == HTTP_ERROR
        assert error.message == "Bad Gateway"

    def test_from_body_entry_without_code(self):
        """Should keep the server message when an entry has no code."""
        body = {"errors": [{"status": 400, "message": "bad email"}]}
        error = APIError.from_body(400, "Bad Request", body)
        assert len(error.items) == 1
        assert error.code == HTTP_ERROR
        assert error.message == "bad email"
        assert error.items[0].origin == SERVER_ERROR_ORIGIN

    def test_from_body_malformed_entries(self):
        """Should skip entries without a message."""
        error = APIError.from_body(500, "", {"errors": [{"foo": "bar"}, "text"]})
        assert len(error.items) == 1
        assert error.code == HTTP_ERROR
        assert error.message == "Request failed with status 500"


class TestAPIResponse:
    """Tests for the APIResponse envelope."""

    def test_success(self):
        """Should carry data and no errors."""
        response = APIResponse.success({"name": "cat.png"})
        assert response.ok is True
        assert response.errors is None
        assert response.data == {"name": "cat.png"}

    def test_failure(self):
        """Should carry errors and no data."""
        response = APIResponse.failure(APIError.local("network_error", "down"))
        assert response.ok is False
        assert response.data is None

    def test_rejects_data_with_errors(self):
        """Should not allow both data and errors."""
        with pytest.raises(ValidationError):
            APIResponse(data=1, errors=APIError.local("x", "y"))

    def test_binary_data_kept(self):
        """Should keep bytes untouched."""
        assert APIResponse.success(b"\x00\x01").data == b"\x00\x01"

    def test_raise_for_errors_returns_data(self):
        """Should return data on success."""
        assert APIResponse.success(True).raise_for_errors() is True

    def test_raise_for_errors_raises_api_error(self):
        """Should raise AltogicAPIError with status."""
        response = APIResponse.failure(APIError.from_body(404, "Not Found", None))
        with pytest.raises(AltogicAPIError) as exc_info:
            response.raise_for_errors()
        assert exc_info.value.status_code == 404
        assert exc_info.value.error is response.errors

    def test_raise_for_errors_without_status(self):
        """Transport errors have no status code."""
        response = APIResponse.failure(APIError.local("network_error", "down"))
        with pytest.raises(AltogicAPIError) as exc_info:
            response.raise_for_errors()
        assert exc_info.value.status_code is None

    def test_raise_for_errors_validation(self):
        """Decode errors raise AltogicValidationError."""
        response = APIResponse.failure(APIError.local(INVALID_RESPONSE_BODY, "bad body"))
        with pytest.raises(AltogicValidationError):
            response.raise_for_errors()


class TestResolveType:
    def test_values(self):
        assert ResolveType("json") is ResolveType.JSON
        assert ResolveType("binary") is ResolveType.BINARY
        assert ResolveType("text") is ResolveType.TEXT
        assert ResolveType("none") is ResolveType.NONE
