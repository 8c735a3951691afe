"""核心客户端实现：鉴权、基础地址、超时与可插拔传输。

Core Client implementation.
"""

from __future__ import annotations

import asyncio
import dataclasses
import time
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from bigmodel_python.client.options import DEFAULT_PATH, ClientConfig, Option
from bigmodel_python.client.response import decode_response
from bigmodel_python.errors import (
    ConfigurationError,
    InvalidRequestError,
    RemoteError,
    RequestTimeoutError,
)
from bigmodel_python.telemetry import get_logger
from bigmodel_python.transport import build_headers, create_http_client, send_request

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

    from bigmodel_python.streaming import Stream
    from bigmodel_python.transport import HTTPDoer
    from bigmodel_python.types.base import RequestModel, ResponseModel

    R = TypeVar("R", bound=ResponseModel)
    T = TypeVar("T", bound=BaseModel)

logger = get_logger(__name__)

# Floor for the deadline handed to a stream opened just before expiry
_MIN_STREAM_DEADLINE = 0.001


class Client:
    """Client for the BigModel API.

    Holds the API key, base URL, request path override, call deadline and
    transport. Read-only after construction and safe to share across
    concurrent calls.

    Example:
        >>> client = Client(api_key, with_timeout(60))
        >>> response = await create_chat_completion(client, request)

        >>> async with Client(api_key) as client:
        ...     image = await generate_image(client, ImageRequest(model="cogview-4", prompt="..."))

        >>> # Test double
        >>> mock = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        >>> client = Client("test-key", with_transport(mock))
    """

    def __init__(self, auth_token: str, *options: Option) -> None:
        """Create a client.

        Args:
            auth_token: API key
            *options: Options applied in order to the default configuration

        Raises:
            ConfigurationError: If the key is empty or an option fails
        """
        if not auth_token:
            raise ConfigurationError("auth token is empty", option="auth_token").with_hint(
                "pass an API key or set BIGMODEL_API_KEY"
            )

        config = ClientConfig(auth_token=auth_token)
        for option in options:
            option(config)

        self._config = config
        self._http: httpx.AsyncClient | None = None

    @property
    def config(self) -> ClientConfig:
        """Copy of the resolved configuration."""
        return dataclasses.replace(self._config)

    @property
    def base_url(self) -> str:
        """Base URL, ending with "/"."""
        return self._config.base_url

    @property
    def path(self) -> str:
        """Request path: the override, or the chat completions path."""
        return self._config.path or DEFAULT_PATH

    @property
    def timeout(self) -> float:
        """Call deadline in seconds; 0 means none."""
        return self._config.timeout

    def resolve_path(self, default: str) -> str:
        """Path for a capability: an explicit override wins over ``default``."""
        return self._config.path or default

    def url_for(self, path: str) -> str:
        """Absolute URL of ``path``."""
        return self._config.base_url + path.lstrip("/")

    @property
    def transport(self) -> HTTPDoer:
        """Transport in use; the default httpx client is created on first use."""
        if self._config.transport is not None:
            return self._config.transport
        if self._http is None:
            self._http = create_http_client(proxy=self._config.proxy)
        return self._http

    def build_request(
        self,
        method: str,
        path: str,
        *,
        body: RequestModel | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        stream: bool = False,
    ) -> httpx.Request:
        """Build a request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: JSON body
            data: Multipart form fields
            files: Multipart file parts
            stream: Whether the response is an event stream

        Returns:
            Prepared request
        """
        multipart = files is not None
        headers = build_headers(
            self._config.auth_token,
            content_type=None if multipart else "application/json",
            stream=stream,
        )
        content = body.to_json() if body is not None else None
        return httpx.Request(
            method,
            self.url_for(path),
            headers=headers,
            content=content,
            data=data if multipart else None,
            files=files,
        )

    def _deadline(self, timeout: float | None) -> float:
        return self._config.timeout if timeout is None else timeout

    async def _with_deadline(self, coro: Any, deadline: float, url: str) -> Any:
        if deadline <= 0:
            return await coro
        try:
            return await asyncio.wait_for(coro, deadline)
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"deadline of {deadline}s exceeded", timeout=deadline, url=url
            ) from e

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: RequestModel | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a request and read the whole body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: JSON body
            data: Multipart form fields
            files: Multipart file parts
            timeout: Per-call deadline overriding the client's

        Returns:
            Response with status < 400 and its body read

        Raises:
            RequestTimeoutError: If the deadline expired
            TransportError: On network errors
            RemoteError: On status >= 400
        """
        request = self.build_request(method, path, body=body, data=data, files=files)
        url = str(request.url)
        deadline = self._deadline(timeout)

        async def send_and_read() -> httpx.Response:
            response = await send_request(self.transport, request)
            await response.aread()
            return response

        logger.debug("Request started", method=method, path=path)
        start = time.monotonic()
        response = await self._with_deadline(send_and_read(), deadline, url)
        elapsed_ms = round((time.monotonic() - start) * 1000, 1)

        if response.status_code >= 400:
            logger.warning(
                "Request failed",
                method=method,
                path=path,
                status=response.status_code,
                elapsed_ms=elapsed_ms,
            )
            raise RemoteError.from_response(
                response.status_code,
                response.content,
                dict(response.headers),
                url=url,
            )

        logger.debug(
            "Request finished",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
        )
        return response

    async def send(
        self,
        method: str,
        path: str,
        model: type[R],
        *,
        body: RequestModel | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> R:
        """Send a request and decode the body into ``model``.

        Raises:
            TransportError: If the request failed (including RemoteError)
            DecodeError: If the body is unusable
        """
        response = await self.request(
            method, path, body=body, data=data, files=files, timeout=timeout
        )
        return decode_response(response.content, model)

    async def open_stream(
        self,
        method: str,
        path: str,
        model: type[T],
        *,
        body: RequestModel | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Stream[T]:
        """Send a request and wrap the event-stream response.

        The call deadline keeps running while the stream is read.

        Returns:
            Open stream; the caller must close it

        Raises:
            RequestTimeoutError: If the deadline expired before the response arrived
            TransportError: On network errors
            RemoteError: On status >= 400
        """
        from bigmodel_python.streaming import Stream

        request = self.build_request(
            method, path, body=body, data=data, files=files, stream=True
        )
        url = str(request.url)
        deadline = self._deadline(timeout)

        logger.debug("Stream request started", method=method, path=path)
        start = time.monotonic()
        response = await self._with_deadline(
            send_request(self.transport, request, stream=True), deadline, url
        )

        if response.status_code >= 400:
            try:
                raw = await response.aread()
            finally:
                await response.aclose()
            logger.warning(
                "Stream request failed",
                method=method,
                path=path,
                status=response.status_code,
            )
            raise RemoteError.from_response(
                response.status_code, raw, dict(response.headers), url=url
            )

        remaining = None
        if deadline > 0:
            remaining = max(deadline - (time.monotonic() - start), _MIN_STREAM_DEADLINE)
        return Stream(response, model, timeout=remaining)

    async def aclose(self) -> None:
        """Close the default transport if this client created it."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"Client(base_url={self._config.base_url!r}, path={self.path!r}, "
            f"timeout={self._config.timeout})"
        )


def require_request(request: Any, operation: str) -> None:
    """Reject a missing request before anything is sent.

    Raises:
        InvalidRequestError: If ``request`` is None
    """
    if request is None:
        raise InvalidRequestError(f"{operation}: request must not be None")
