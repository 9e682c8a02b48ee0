"""Redaction of sensitive values before they reach debug output."""

from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "password",
    "newpassword",
    "oldpassword",
    "currentpassword",
    "token",
    "accesstoken",
    "apikey",
    "api_key",
    "authorization",
    "session",
    "signingkey",
    "x-client-key",
    "x-signature",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: Any) -> Any:
    """Recursively redact sensitive keys from a request body or header map.

    Key matching is case-insensitive. Creates a copy - the original payload
    is never mutated. Non-container values are returned as-is.

    Args:
        payload: The JSON-like value to redact.

    Returns:
        A new value with sensitive entries replaced by "[REDACTED]".
    """
    if isinstance(payload, dict):
        result = {}
        for key, value in payload.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact_payload(value)
        return result
    elif isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    else:
        return payload
