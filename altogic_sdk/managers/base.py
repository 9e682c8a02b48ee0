"""Shared plumbing for resource managers."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from altogic_sdk._internal.fetcher import Fetcher
from altogic_sdk.exceptions import ClientError
from altogic_sdk.models.response import INVALID_RESPONSE_BODY, APIError, APIResponse


class APIBase:
    """Base class of every manager: holds the shared fetcher."""

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    @property
    def fetcher(self) -> Fetcher:
        return self._fetcher


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop entries whose value is None so they never reach the wire."""
    return {key: value for key, value in values.items() if value is not None}


def require(value: Any, name: str) -> str:
    """Reject missing or blank identifiers before any request is made."""
    if not isinstance(value, str) or not value.strip():
        raise ClientError("missing_required_value", f"{name} is a required parameter")
    return value


def to_bool(response: APIResponse[Any], key: str = "exists") -> APIResponse[bool]:
    """Narrow a payload to a boolean, reading ``key`` from an object payload."""
    if response.errors is not None:
        return response
    data = response.data
    if isinstance(data, dict):
        data = data.get(key)
    return APIResponse.success(bool(data))


def to_model(
    response: APIResponse[Any],
    model: type[BaseModel],
    *,
    many: bool = False,
) -> APIResponse[Any]:
    """Validate a JSON payload into ``model`` (or a list of it).

    A payload that does not fit the model becomes an ``invalid_response_body``
    error; a failed response passes through unchanged.
    """
    if response.errors is not None or response.data is None:
        return response
    try:
        if many:
            data = [model.model_validate(item) for item in response.data]
        else:
            data = model.model_validate(response.data)
    except (ValidationError, TypeError) as e:
        return APIResponse.failure(
            APIError.local(
                INVALID_RESPONSE_BODY,
                f"Unexpected {model.__name__} payload",
                details=str(e),
            )
        )
    return APIResponse.success(data)


def as_list(values: str | list[str]) -> list[str]:
    """Accept a single string where a list of strings is expected."""
    return [values] if isinstance(values, str) else list(values)


def require_payload(response: APIResponse[Any]) -> APIResponse[Any]:
    """Turn a successful reply with no payload into an ``invalid_response_body`` error."""
    if response.errors is None and response.data is None:
        return APIResponse.failure(
            APIError.local(INVALID_RESPONSE_BODY, "Expected a response payload, got an empty body")
        )
    return response
