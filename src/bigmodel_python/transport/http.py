"""HTTP 传输层：基于 httpx 的可插拔异步传输。

HTTP transport for bigmodel-python.

Provides:
- The HTTPDoer protocol every transport must satisfy
- The default httpx.AsyncClient (HTTP/2 when h2 is installed)
- Request header construction
- Translation of httpx exceptions into TransportError
"""

from __future__ import annotations

import importlib.util
import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from bigmodel_python.errors import RequestTimeoutError, TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping


# Connect timeout for the default client; the call deadline is enforced by the caller
_DEFAULT_CONNECT_TIMEOUT = 10.0

_UA_VERSION: str | None = None


@runtime_checkable
class HTTPDoer(Protocol):
    """Anything that can send an httpx.Request.

    ``httpx.AsyncClient`` satisfies this protocol, so tests can pass an
    ``httpx.AsyncClient(transport=httpx.MockTransport(handler))``.
    """

    async def send(
        self, request: httpx.Request, *, stream: bool = False
    ) -> httpx.Response: ...


def _http2_enabled() -> bool:
    """Enable HTTP/2 only when optional dependency is present."""
    return importlib.util.find_spec("h2") is not None


def _trust_env_enabled() -> bool:
    """Use env proxy settings only when explicitly enabled."""
    return os.getenv("BIGMODEL_HTTP_TRUST_ENV", "0") == "1"


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        from bigmodel_python import __version__

        _UA_VERSION = __version__
    return _UA_VERSION


def create_http_client(*, proxy: str | None = None) -> httpx.AsyncClient:
    """Create the default transport.

    The read/write timeouts are left unset; the client's call deadline
    bounds each request instead.

    Args:
        proxy: Proxy URL

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(None, connect=_DEFAULT_CONNECT_TIMEOUT),
        proxy=proxy,
        http2=_http2_enabled(),
        trust_env=_trust_env_enabled(),
    )


def build_headers(
    auth_token: str,
    *,
    content_type: str | None = "application/json",
    stream: bool = False,
    extra_headers: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build request headers.

    Args:
        auth_token: API key sent as a bearer token
        content_type: Content-Type header; None lets httpx set it (multipart)
        stream: Whether the response is consumed as an event stream
        extra_headers: Additional headers to include

    Returns:
        Complete headers dictionary
    """
    headers = {
        "Authorization": f"Bearer {auth_token}",
        "Accept": "application/json",
        "User-Agent": f"bigmodel-python/{_get_ua_version()}",
    }
    if content_type:
        headers["Content-Type"] = content_type
    if stream:
        headers["Accept"] = "text/event-stream"
        headers["Cache-Control"] = "no-cache"

    if extra_headers:
        headers.update(extra_headers)

    return headers


async def send_request(
    transport: HTTPDoer,
    request: httpx.Request,
    *,
    stream: bool = False,
) -> httpx.Response:
    """Send a request, translating httpx failures.

    Args:
        transport: Transport to send through
        request: Prepared request
        stream: Leave the body unread so it can be consumed incrementally

    Returns:
        HTTP response (any status)

    Raises:
        RequestTimeoutError: On httpx timeouts
        TransportError: On network/connection errors
    """
    url = str(request.url)
    try:
        return await transport.send(request, stream=stream)
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(f"Request timed out: {e}", url=url, cause=e) from e
    except httpx.ConnectError as e:
        raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
    except httpx.HTTPError as e:
        raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e
