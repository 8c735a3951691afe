"""Tests for streaming module."""

import asyncio

import httpx
import pytest
from helpers import (
    ChunkedStream,
    FailingCloseStream,
    HangingStream,
    PausedStream,
    chunk_payload,
    sse_body,
    sse_response,
    stream_response,
)

from bigmodel_python.client import CancelReason, with_timeout
from bigmodel_python.errors import (
    RemoteError,
    StreamClosedError,
    StreamDecodeError,
    StreamError,
    StreamReadError,
    StreamTimeoutError,
)
from bigmodel_python.streaming import LineKind, LineReader, Stream, classify_line
from bigmodel_python.types import ChatCompletionChunk, Usage


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


class TestClassifyLine:
    """Tests for SSE line classification."""

    def test_data_line(self) -> None:
        """Test payload extraction."""
        line = classify_line(b'data: {"id":"x"}\n')
        assert line.kind is LineKind.DATA
        assert line.data == '{"id":"x"}'

    def test_done_line(self) -> None:
        """Test the sentinel."""
        assert classify_line(b"data: [DONE]\r\n").kind is LineKind.DONE
        assert classify_line("  data: [DONE]  ").kind is LineKind.DONE

    @pytest.mark.parametrize(
        "raw",
        [b"\n", b": keep-alive\n", b"event: message\n", b"id: 7\n", b"data: \n", b"data:\n"],
    )
    def test_skipped(self, raw: bytes) -> None:
        """Test non-payload lines are skipped."""
        assert classify_line(raw).kind is LineKind.SKIP


class TestLineReader:
    """Tests for LineReader."""

    @pytest.mark.asyncio
    async def test_lines_across_chunks(self) -> None:
        """Test lines split over arbitrary chunk boundaries."""
        reader = LineReader(_chunks(b"da", b"ta: 1\nda", b"ta: 2\n\n"))
        assert await reader.readline() == b"data: 1\n"
        assert await reader.readline() == b"data: 2\n"
        assert await reader.readline() == b"\n"
        assert await reader.readline() is None
        assert reader.at_eof

    @pytest.mark.asyncio
    async def test_partial_final_line_dropped(self) -> None:
        """Test unterminated bytes at end of input."""
        reader = LineReader(_chunks(b"data: 1\ndata: {\"trunc"))
        assert await reader.readline() == b"data: 1\n"
        assert await reader.readline() is None
        assert reader.leftover == b'data: {"trunc'

    @pytest.mark.asyncio
    async def test_buffered_line(self) -> None:
        """Test buffered line detection."""
        reader = LineReader(_chunks(b"a\nb\n"))
        assert not reader.has_buffered_line
        await reader.readline()
        assert reader.has_buffered_line

    @pytest.mark.asyncio
    async def test_long_line_in_small_chunks(self) -> None:
        """Test a line delivered a byte at a time, followed by another."""
        payload = b"data: " + b"x" * 5000
        parts = [payload[i : i + 1] for i in range(len(payload))] + [b"\nnext\n"]
        reader = LineReader(_chunks(*parts))

        assert await reader.readline() == payload + b"\n"
        assert reader.has_buffered_line
        assert await reader.readline() == b"next\n"
        assert await reader.readline() is None
        assert reader.at_eof


def _stream(body: bytes, **kwargs) -> Stream[ChatCompletionChunk]:
    response = sse_response(body)
    return Stream(response, ChatCompletionChunk, **kwargs)


class TestStreamReceive:
    """Tests for Stream.receive."""

    @pytest.mark.asyncio
    async def test_events_then_done(self) -> None:
        """Test events in wire order followed by end of stream."""
        stream = _stream(sse_body(chunk_payload("Hel"), chunk_payload("lo")))

        first = await stream.receive()
        second = await stream.receive()
        assert first is not None and first.delta_text == "Hel"
        assert second is not None and second.delta_text == "lo"
        assert await stream.receive() is None
        assert stream.closed
        assert stream.events_received == 2
        assert stream.token.reason is CancelReason.END_OF_STREAM

    @pytest.mark.asyncio
    async def test_minimal_chunk_has_zero_usage(self) -> None:
        """Test a chunk without usage decodes with zero usage."""
        stream = _stream(b'data: {"id":"x","model":"m"}\n')

        chunk = await stream.receive()

        assert chunk is not None
        assert chunk.id == "x"
        assert chunk.model == "m"
        assert chunk.usage == Usage()
        assert chunk.usage.total_tokens == 0

    @pytest.mark.asyncio
    async def test_null_usage_is_zero(self) -> None:
        """Test explicit null usage."""
        stream = _stream(b'data: {"id":"x","usage":null}\n')
        chunk = await stream.receive()
        assert chunk is not None
        assert chunk.usage.prompt_tokens == 0

    @pytest.mark.asyncio
    async def test_done_ends_stream_immediately(self) -> None:
        """Test [DONE] ends the stream regardless of what follows."""
        body = b'data: [DONE]\ndata: {"id":"late"}\n'
        stream = _stream(body)
        assert await stream.receive() is None
        assert stream.closed

    @pytest.mark.asyncio
    async def test_non_data_lines_skipped(self) -> None:
        """Test framing and comment lines produce no events."""
        body = (
            b": ping\n"
            b"event: message\n"
            b"id: 1\n"
            b"\n"
            b'data: {"id":"x","choices":[{"index":0,"delta":{"content":"a"}}]}\n'
            b"retry: 100\n"
            b"data: [DONE]\n"
        )
        stream = _stream(body)

        chunk = await stream.receive()
        assert chunk is not None and chunk.delta_text == "a"
        assert await stream.receive() is None
        assert stream.events_received == 1

    @pytest.mark.asyncio
    async def test_end_of_input_without_done(self) -> None:
        """Test end of input is end of stream."""
        stream = _stream(sse_body(chunk_payload("a"), done=False))
        assert await stream.receive() is not None
        assert await stream.receive() is None
        assert stream.closed

    @pytest.mark.asyncio
    async def test_unterminated_final_line_dropped(self) -> None:
        """Test a final line without newline is not decoded."""
        stream = _stream(b'data: {"id":"x"}')
        assert await stream.receive() is None

    @pytest.mark.asyncio
    async def test_decode_error(self) -> None:
        """Test an undecodable payload."""
        stream = _stream(b"data: {not json}\n")

        with pytest.raises(StreamDecodeError) as exc_info:
            await stream.receive()

        assert exc_info.value.raw_data == "{not json}"
        assert "unmarshal error" in str(exc_info.value)
        assert not stream.closed
        await stream.close()

    @pytest.mark.asyncio
    async def test_decode_error_does_not_lose_later_events(self) -> None:
        """Test reading continues after a decode error."""
        stream = _stream(b"data: [1,2]\n" + sse_body(chunk_payload("ok")))

        with pytest.raises(StreamDecodeError):
            await stream.receive()
        chunk = await stream.receive()
        assert chunk is not None and chunk.delta_text == "ok"
        await stream.close()

    @pytest.mark.asyncio
    async def test_read_error(self) -> None:
        """Test a body failing mid-stream."""
        body = ChunkedStream([sse_body(chunk_payload("a"), done=False)], error=httpx.ReadError("reset"))
        stream = Stream(stream_response(body), ChatCompletionChunk)

        assert await stream.receive() is not None
        with pytest.raises(StreamReadError) as exc_info:
            await stream.receive()

        assert "error reading stream" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ReadError)
        await stream.close()


class TestStreamClose:
    """Tests for Stream.close and cancellation."""

    @pytest.mark.asyncio
    async def test_receive_after_close(self) -> None:
        """Test close-then-receive."""
        stream = _stream(sse_body(chunk_payload("a")))
        await stream.close()

        with pytest.raises(StreamClosedError):
            await stream.receive()

    @pytest.mark.asyncio
    async def test_receive_after_end_of_stream(self) -> None:
        """Test receive after the stream closed itself."""
        stream = _stream(sse_body())
        assert await stream.receive() is None
        with pytest.raises(StreamClosedError):
            await stream.receive()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        """Test closing twice."""
        body = ChunkedStream([sse_body(chunk_payload("a"))])
        stream = Stream(stream_response(body), ChatCompletionChunk)

        await stream.close()
        await stream.close()

        assert stream.closed
        assert body.closed
        assert stream.token.reason is CancelReason.USER_REQUEST

    @pytest.mark.asyncio
    async def test_close_failure_after_cancel(self) -> None:
        """Test a failing close is reported after the token is cancelled."""
        stream = Stream(stream_response(FailingCloseStream([b""])), ChatCompletionChunk)

        with pytest.raises(StreamError) as exc_info:
            await stream.close()

        assert "failed to close response body" in str(exc_info.value)
        assert stream.token.is_cancelled

    @pytest.mark.asyncio
    async def test_close_unblocks_pending_receive(self) -> None:
        """Test closing from another task while a read is pending."""
        body = HangingStream([b'data: {"id":"x"}\n'])
        stream = Stream(stream_response(body), ChatCompletionChunk)
        assert await stream.receive() is not None

        pending = asyncio.create_task(stream.receive())
        await asyncio.sleep(0.01)
        await stream.close()

        with pytest.raises(StreamClosedError):
            await asyncio.wait_for(pending, 1.0)
        assert body.closed

    @pytest.mark.asyncio
    async def test_deadline_expiry(self) -> None:
        """Test the call deadline interrupts a stalled read."""
        body = HangingStream()
        stream = Stream(stream_response(body), ChatCompletionChunk, timeout=0.05)

        with pytest.raises(StreamTimeoutError):
            await asyncio.wait_for(stream.receive(), 1.0)

        assert stream.closed
        assert stream.token.reason is CancelReason.TIMEOUT
        assert body.closed

    @pytest.mark.asyncio
    async def test_cancelled_receive_keeps_later_events(self) -> None:
        """Test a receive() timed out by the caller does not end the stream."""
        body = PausedStream(
            [b'data: {"id":"1"}\n'],
            [b'data: {"id":"2"}\n', b"data: [DONE]\n"],
        )
        stream = Stream(stream_response(body), ChatCompletionChunk)
        assert (await stream.receive()).id == "1"

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.receive(), 0.02)
        assert not stream.closed

        body.resume()
        second = await asyncio.wait_for(stream.receive(), 1.0)

        assert second is not None
        assert second.id == "2"
        assert await stream.receive() is None
        assert stream.events_received == 2
        assert body.closed

    @pytest.mark.asyncio
    async def test_close_after_cancelled_receive(self) -> None:
        """Test close() abandons the read left by a cancelled receive()."""
        body = PausedStream([], [b'data: {"id":"1"}\n'])
        stream = Stream(stream_response(body), ChatCompletionChunk)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.receive(), 0.02)
        await stream.close()

        assert body.closed
        with pytest.raises(StreamClosedError):
            await stream.receive()

    @pytest.mark.asyncio
    async def test_async_iteration(self) -> None:
        """Test async with / async for."""
        body = sse_body(chunk_payload("a"), chunk_payload("b"), chunk_payload("c"))
        async with _stream(body) as stream:
            text = "".join([chunk.delta_text async for chunk in stream])
        assert text == "abc"
        assert stream.closed


class TestOpenStream:
    """Tests for Client.open_stream."""

    @pytest.mark.asyncio
    async def test_stream_headers(self, make_client, requests_seen) -> None:
        """Test streaming requests ask for an event stream."""
        client = make_client(lambda request: sse_response(sse_body(chunk_payload("a"))))

        stream = await client.open_stream("POST", "p", ChatCompletionChunk)
        async with stream:
            assert [c.delta_text async for c in stream] == ["a"]

        sent = requests_seen[0]
        assert sent.headers["Accept"] == "text/event-stream"
        assert sent.headers["Cache-Control"] == "no-cache"

    @pytest.mark.asyncio
    async def test_error_status_before_stream(self, make_client) -> None:
        """Test a 4xx is raised instead of returning a stream."""
        client = make_client(
            lambda request: httpx.Response(401, content=b'{"error":{"code":"1000","message":"auth"}}')
        )
        with pytest.raises(RemoteError) as exc_info:
            await client.open_stream("POST", "p", ChatCompletionChunk)
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "1000"

    @pytest.mark.asyncio
    async def test_remaining_deadline_handed_to_stream(self, make_client) -> None:
        """Test the stream inherits what is left of the deadline."""
        client = make_client(lambda request: stream_response(HangingStream()), with_timeout(0.1))

        stream = await client.open_stream("POST", "p", ChatCompletionChunk)
        assert stream.token.timeout is not None
        assert 0 < stream.token.timeout <= 0.1

        with pytest.raises(StreamTimeoutError):
            await asyncio.wait_for(stream.receive(), 1.0)

    @pytest.mark.asyncio
    async def test_no_deadline(self, make_client) -> None:
        """Test a zero timeout leaves the stream without deadline."""
        client = make_client(lambda request: sse_response(sse_body()), with_timeout(0))
        stream = await client.open_stream("POST", "p", ChatCompletionChunk)
        assert stream.token.timeout is None
        await stream.close()
