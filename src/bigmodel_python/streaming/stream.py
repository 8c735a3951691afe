"""流式响应句柄：逐行读取 SSE 事件并解码为类型化模型。

Stream handle for server-sent event responses.

A Stream owns an open httpx.Response, a CancelToken derived from the call
deadline and a LineReader over the body. The caller pulls events one at a
time; the stream closes itself at the ``data: [DONE]`` sentinel or at end
of input, and can be closed early with close().
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from bigmodel_python.client.cancel import CancelReason, CancelToken
from bigmodel_python.errors import (
    StreamClosedError,
    StreamDecodeError,
    StreamError,
    StreamReadError,
    StreamTimeoutError,
)
from bigmodel_python.streaming.reader import LineReader
from bigmodel_python.streaming.sse import LineKind, classify_line
from bigmodel_python.telemetry import get_logger

if TYPE_CHECKING:
    import httpx

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class Stream(Generic[T]):
    """Pull-style iterator over a streamed response.

    Single reader: concurrent receive() calls on one stream are not
    supported. close() may be called from another task; a pending
    receive() then fails with StreamClosedError. A receive() cancelled from
    outside, as by asyncio.wait_for, loses nothing: its pending read is
    resumed by the next receive().

    Example:
        >>> async with await stream_chat_completion(client, request) as stream:
        ...     async for chunk in stream:
        ...         print(chunk.delta_text, end="")

        >>> stream = await stream_chat_completion(client, request)
        >>> try:
        ...     while (chunk := await stream.receive()) is not None:
        ...         handle(chunk)
        ... finally:
        ...     await stream.close()
    """

    def __init__(
        self,
        response: httpx.Response,
        model: type[T],
        *,
        timeout: float | None = None,
        token: CancelToken | None = None,
    ) -> None:
        """Wrap a 2xx streamed response.

        Args:
            response: Open response whose body has not been read
            model: Model each ``data:`` payload decodes into
            timeout: Seconds left before the call deadline; None or 0 for none
            token: Token to use instead of deriving one from ``timeout``
        """
        self._response = response
        self._model = model
        self._token = token or CancelToken(timeout=timeout if timeout and timeout > 0 else None)
        self._reader = LineReader(response.aiter_bytes())
        self._read_task: asyncio.Future[bytes | None] | None = None
        self._closed = False
        self._events = 0

        logger.debug(
            "Stream opened",
            url=_request_url(response),
            model=model.__name__,
            timeout=timeout,
        )

    @property
    def closed(self) -> bool:
        """Whether the stream has been closed."""
        return self._closed

    @property
    def token(self) -> CancelToken:
        """Cancellation token of this stream."""
        return self._token

    @property
    def response(self) -> httpx.Response:
        """Underlying HTTP response."""
        return self._response

    @property
    def events_received(self) -> int:
        """Number of events returned so far."""
        return self._events

    async def receive(self) -> T | None:
        """Receive the next event.

        Returns:
            The next decoded event, or None at end of stream

        Raises:
            StreamClosedError: If the stream is closed
            StreamTimeoutError: If the call deadline expired
            StreamReadError: If reading the body failed
            StreamDecodeError: If a payload could not be decoded
        """
        if self._closed:
            raise StreamClosedError()

        while True:
            raw = await self._read_line()
            if raw is None:
                if self._reader.leftover:
                    logger.debug(
                        "Dropping unterminated final line",
                        size=len(self._reader.leftover),
                    )
                await self._finish()
                return None

            line = classify_line(raw)
            if line.kind is LineKind.DONE:
                await self._finish()
                return None
            if line.kind is LineKind.SKIP:
                continue

            try:
                event = self._model.model_validate_json(line.data)
            except ValidationError as e:
                raise StreamDecodeError(f"unmarshal error: {e}", raw_data=line.data) from e

            self._events += 1
            return event

    async def _read_line(self) -> bytes | None:
        """Read one line, giving up as soon as the token is cancelled."""
        if self._token.is_cancelled:
            raise await self._cancelled_error()

        read = self._read_task
        if read is None:
            if self._reader.has_buffered_line:
                return await self._reader.readline()
            read = asyncio.ensure_future(self._reader.readline())
            self._read_task = read

        cancelled = asyncio.ensure_future(self._token.wait())
        try:
            await asyncio.wait({read, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()

        # A caller cancelled while waiting leaves the read pending for the
        # next receive(); only the token abandons it.
        if not read.done():
            read.cancel()
            await asyncio.wait({read})
        self._read_task = None

        if read.cancelled():
            raise await self._cancelled_error()

        error = read.exception()
        if error is not None:
            if self._token.is_cancelled:
                raise await self._cancelled_error()
            raise StreamReadError(f"error reading stream: {error}", cause=error) from error

        return read.result()

    async def _cancelled_error(self) -> StreamError:
        """Error for a read interrupted by cancellation; closes on deadline expiry."""
        if self._token.reason is CancelReason.TIMEOUT:
            await self._abandon_read()
            await self._close_response()
            self._closed = True
            logger.warning("Stream deadline expired", events=self._events)
            return StreamTimeoutError(
                f"stream deadline of {self._token.timeout}s expired"
            )
        return StreamClosedError()

    async def _abandon_read(self) -> None:
        """Cancel a read left pending by an interrupted receive()."""
        read, self._read_task = self._read_task, None
        if read is None:
            return
        if not read.done():
            read.cancel()
            await asyncio.wait({read})
        elif not read.cancelled():
            # Result nobody will receive
            read.exception()

    async def _finish(self) -> None:
        """Close after the last event."""
        self._token.cancel(CancelReason.END_OF_STREAM)
        self._closed = True
        await self._close_response()
        logger.debug("Stream finished", events=self._events)

    async def _close_response(self) -> None:
        try:
            await self._response.aclose()
        except Exception as e:
            raise StreamError(f"failed to close response body: {e}") from e

    async def close(self) -> None:
        """Close the stream.

        The token is cancelled first, so a pending receive() unblocks even
        if closing the response fails. Closing twice is a no-op.

        Raises:
            StreamError: If the response body could not be closed
        """
        self._token.cancel(CancelReason.USER_REQUEST)
        if self._closed:
            return
        self._closed = True

        await self._abandon_read()
        logger.debug("Stream closed", events=self._events)
        await self._close_response()

    async def __aenter__(self) -> Stream[T]:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def __aiter__(self) -> Stream[T]:
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration
        event = await self.receive()
        if event is None:
            raise StopAsyncIteration
        return event


def _request_url(response: httpx.Response) -> str | None:
    try:
        return str(response.request.url)
    except RuntimeError:
        return None
