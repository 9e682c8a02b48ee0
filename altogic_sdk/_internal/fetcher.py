"""Request dispatcher shared by every resource manager.

The fetcher owns the HTTP client, the default headers and the current
session. It sends one request per call and never raises for HTTP, network,
timeout or decode failures: those come back as ``APIResponse.errors``.
"""

import hashlib
import hmac
import json
import sys
import threading
import time
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx

from altogic_sdk._internal.http import DEFAULT_TIMEOUT, create_http_client
from altogic_sdk._internal.redaction import redact_payload
from altogic_sdk.models.auth import Session
from altogic_sdk.models.response import (
    INVALID_RESPONSE_BODY,
    NETWORK_ERROR,
    REQUEST_TIMEOUT,
    APIError,
    APIResponse,
    ResolveType,
)
from altogic_sdk.models.storage import ProgressCallback

# =============================================================================
# Constants
# =============================================================================

CLIENT_ID = "altogic-py"

CLIENT_HEADER = "X-Client"
CLIENT_KEY_HEADER = "X-Client-Key"
API_KEY_HEADER = "Authorization"
SESSION_HEADER = "Session"
TIMESTAMP_HEADER = "X-Timestamp"
SIGNATURE_HEADER = "X-Signature"

UPLOAD_CHUNK_SIZE = 64 * 1024  # 64KB


def default_headers(client_key: str, api_key: str | None = None) -> dict[str, str]:
    """Headers sent with every request of a client."""
    headers = {
        CLIENT_HEADER: CLIENT_ID,
        CLIENT_KEY_HEADER: client_key,
    }
    if api_key is not None:
        headers[API_KEY_HEADER] = api_key
    return headers


def encode_query(query: Mapping[str, Any] | None) -> dict[str, str] | None:
    """Flatten query values to strings.

    ``None`` values are dropped, booleans become ``true``/``false`` and
    dicts or lists are JSON-encoded.
    """
    if not query:
        return None
    params: dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (dict, list, tuple)):
            params[key] = json.dumps(value, separators=(",", ":"), default=str)
        else:
            params[key] = str(value)
    return params or None


def sign_request(
    signing_key: str,
    timestamp: str,
    method: str,
    path: str,
    content: bytes | None = None,
    query: str = "",
) -> str:
    """Hex HMAC-SHA256 over ``timestamp.METHOD.path[?query][.body]``.

    ``query`` is the encoded query string as sent, without the leading "?".
    """
    target = f"{path}?{query}" if query else path
    message = f"{timestamp}.{method.upper()}.{target}".encode()
    if content:
        message += b"." + content
    return hmac.new(signing_key.encode(), message, hashlib.sha256).hexdigest()


class Fetcher:
    """HTTP dispatcher for one app environment.

    Session and header state is read under a lock when a request is built, so
    a concurrent sign-in or sign-out never produces a request with a partially
    updated header set. Nothing is awaited while the lock is held.
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str],
        *,
        signing_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            base_url: Normalized app environment URL.
            headers: Default headers for every request.
            signing_key: Optional HMAC key used to sign requests.
            timeout: Default request timeout in seconds.
            debug: Enable debug logging to stderr.
            transport: Optional httpx transport override.
        """
        self._base_url = base_url
        self._headers = dict(headers)
        self._signing_key = signing_key
        self._debug = debug
        self._session: Session | None = None
        self._lock = threading.Lock()
        self._client = create_http_client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[altogic-sdk] {message}", file=sys.stderr)

    # =========================================================================
    # Session and header state
    # =========================================================================

    def set_session(self, session: Session) -> None:
        """Attach ``session`` to every subsequent request."""
        with self._lock:
            self._session = session
        self._log_debug("Session installed")

    def clear_session(self) -> None:
        with self._lock:
            self._session = None
        self._log_debug("Session cleared")

    def get_session(self) -> Session | None:
        with self._lock:
            return self._session

    @property
    def has_session(self) -> bool:
        with self._lock:
            return self._session is not None

    def set_api_key(self, api_key: str | None) -> None:
        """Replace the API key header, or remove it when ``api_key`` is None."""
        with self._lock:
            if api_key is None:
                self._headers.pop(API_KEY_HEADER, None)
            else:
                self._headers[API_KEY_HEADER] = api_key

    def clear_api_key(self) -> None:
        self.set_api_key(None)

    def get_headers(self) -> dict[str, str]:
        """Snapshot of the default headers plus the session header, if any."""
        with self._lock:
            headers = dict(self._headers)
            if self._session is not None:
                headers[SESSION_HEADER] = self._session.token
        return headers

    # =========================================================================
    # Requests
    # =========================================================================

    async def send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        resolve_type: ResolveType = ResolveType.JSON,
        timeout: float | None = None,
    ) -> APIResponse[Any]:
        """Send one request and normalize its outcome.

        Args:
            method: HTTP method.
            path: Path relative to the environment URL, starting with "/".
            body: JSON-serializable request body.
            query: Query parameters, encoded with ``encode_query``.
            headers: Per-call headers, applied over the defaults.
            resolve_type: How to parse a successful response body.
            timeout: Per-call timeout in seconds, overriding the default.

        Returns:
            The result envelope. Never raises for HTTP or transport failures.
        """
        method = method.upper()
        request_headers = self.get_headers()
        content: bytes | None = None
        if body is not None:
            content = json.dumps(body, separators=(",", ":"), default=str).encode("utf-8")
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)
        params = encode_query(query)
        self._sign(request_headers, method, path, content, params)

        if body is not None:
            self._log_debug(f"{method} {path} body={redact_payload(body)!r}")
        else:
            self._log_debug(f"{method} {path}")

        return await self._execute(
            method,
            path,
            content=content,
            params=params,
            headers=request_headers,
            resolve_type=resolve_type,
            timeout=timeout,
        )

    async def get(self, path: str, **kwargs: Any) -> APIResponse[Any]:
        return await self.send("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> APIResponse[Any]:
        return await self.send("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> APIResponse[Any]:
        return await self.send("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> APIResponse[Any]:
        return await self.send("DELETE", path, **kwargs)

    async def upload(
        self,
        path: str,
        content: bytes,
        file_name: str,
        content_type: str,
        *,
        query: Mapping[str, Any] | None = None,
        on_progress: ProgressCallback | None = None,
        timeout: float | None = None,
    ) -> APIResponse[Any]:
        """Upload raw bytes.

        The body streams in chunks; ``on_progress`` is called with
        ``(bytes_sent, total_bytes)`` after each chunk. The callback's return
        value is ignored.

        Args:
            path: Upload path.
            content: File contents.
            file_name: Sent as the ``fileName`` query parameter unless the
                query already carries one.
            content_type: MIME type of ``content``.
            query: Additional query parameters.
            on_progress: Optional progress callback.
            timeout: Per-call timeout in seconds.

        Returns:
            The result envelope with the JSON-decoded response on success.
        """
        request_headers = self.get_headers()
        request_headers["Content-Type"] = content_type
        request_headers["Content-Length"] = str(len(content))
        params = dict(query or {})
        params.setdefault("fileName", file_name)
        encoded = encode_query(params)
        self._sign(request_headers, "POST", path, content, encoded)

        self._log_debug(f"POST {path} upload {file_name!r} ({len(content)} bytes)")
        return await self._execute(
            "POST",
            path,
            content=_stream_chunks(content, on_progress),
            params=encoded,
            headers=request_headers,
            resolve_type=ResolveType.JSON,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def _sign(
        self,
        headers: dict[str, str],
        method: str,
        path: str,
        content: bytes | None,
        params: dict[str, str] | None = None,
    ) -> None:
        if not self._signing_key:
            return
        timestamp = str(int(time.time()))
        query = str(httpx.QueryParams(params)) if params else ""
        headers[TIMESTAMP_HEADER] = timestamp
        headers[SIGNATURE_HEADER] = sign_request(
            self._signing_key, timestamp, method, path, content, query
        )

    async def _execute(
        self,
        method: str,
        path: str,
        *,
        content: bytes | AsyncIterator[bytes] | None,
        params: dict[str, str] | None,
        headers: dict[str, str],
        resolve_type: ResolveType,
        timeout: float | None,
    ) -> APIResponse[Any]:
        try:
            response = await self._client.request(
                method,
                path,
                content=content,
                params=params,
                headers=headers,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as e:
            self._log_debug(f"{method} {path} timed out")
            return APIResponse.failure(
                APIError.local(REQUEST_TIMEOUT, str(e) or "Request timed out")
            )
        except httpx.HTTPError as e:
            self._log_debug(f"{method} {path} network error: {e}")
            return APIResponse.failure(
                APIError.local(NETWORK_ERROR, str(e) or "Network error")
            )

        self._log_debug(f"{method} {path} -> {response.status_code}")
        return self._resolve(response, resolve_type)

    def _resolve(self, response: httpx.Response, resolve_type: ResolveType) -> APIResponse[Any]:
        """Parse a response according to the declared resolve type."""
        resolve_type = ResolveType(resolve_type)
        if not response.is_success:
            return APIResponse.failure(_error_from_response(response))

        if resolve_type is ResolveType.NONE:
            return APIResponse.success(None)
        if resolve_type is ResolveType.BINARY:
            return APIResponse.success(response.content)
        if resolve_type is ResolveType.TEXT:
            return APIResponse.success(response.text)

        if not response.content:
            return APIResponse.success(None)
        try:
            return APIResponse.success(response.json())
        except ValueError:
            self._log_debug(f"Response body is not valid JSON ({len(response.content)} bytes)")
            return APIResponse.failure(
                APIError.local(
                    INVALID_RESPONSE_BODY,
                    "Response body is not valid JSON",
                    status=response.status_code,
                    status_text=response.reason_phrase,
                )
            )


def _error_from_response(response: httpx.Response) -> APIError:
    body: Any = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = None
    return APIError.from_body(response.status_code, response.reason_phrase, body)


async def _stream_chunks(
    content: bytes,
    on_progress: ProgressCallback | None,
) -> AsyncIterator[bytes]:
    total = len(content)
    sent = 0
    for start in range(0, total, UPLOAD_CHUNK_SIZE):
        chunk = content[start : start + UPLOAD_CHUNK_SIZE]
        yield chunk
        sent += len(chunk)
        if on_progress is not None:
            on_progress(sent, total)
    if total == 0 and on_progress is not None:
        on_progress(0, 0)
