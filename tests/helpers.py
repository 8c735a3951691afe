"""Shared helpers for building fake BigModel responses."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

TEST_BASE_URL = "https://test.bigmodel.local/api/"


def json_response(payload: Any, status_code: int = 200, **kwargs: Any) -> httpx.Response:
    """JSON response."""
    return httpx.Response(status_code, json=payload, **kwargs)


def sse_body(*events: Any, done: bool = True) -> bytes:
    """Encode events as ``data:`` lines; strings are written verbatim."""
    lines = []
    for event in events:
        payload = event if isinstance(event, str) else json.dumps(event)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def sse_response(body: bytes) -> httpx.Response:
    """Event-stream response with a fixed body."""
    return httpx.Response(
        200, content=body, headers={"content-type": "text/event-stream"}
    )


def chat_payload(content: str = "Hello!", **overrides: Any) -> dict[str, Any]:
    """A successful chat completion body."""
    payload: dict[str, Any] = {
        "id": "chat-123",
        "request_id": "req-123",
        "created": 1700000000,
        "model": "glm-4-flash",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
    payload.update(overrides)
    return payload


def chunk_payload(delta: str, **overrides: Any) -> dict[str, Any]:
    """One streamed chat chunk."""
    payload: dict[str, Any] = {
        "id": "chat-123",
        "created": 1700000000,
        "model": "glm-4-flash",
        "choices": [{"index": 0, "delta": {"role": "assistant", "content": delta}}],
    }
    payload.update(overrides)
    return payload


class ChunkedStream(httpx.AsyncByteStream):
    """Response body yielding the given chunks, optionally failing afterwards."""

    def __init__(self, chunks: list[bytes], error: Exception | None = None) -> None:
        self._chunks = chunks
        self._error = error
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error

    async def aclose(self) -> None:
        self.closed = True


class HangingStream(httpx.AsyncByteStream):
    """Response body that sends its chunks and then never ends."""

    def __init__(self, chunks: list[bytes] | None = None) -> None:
        self._chunks = chunks or []
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        await asyncio.Event().wait()
        yield b""

    async def aclose(self) -> None:
        self.closed = True


class PausedStream(httpx.AsyncByteStream):
    """Response body that sends its first chunks, then waits for resume()."""

    def __init__(self, head: list[bytes], tail: list[bytes]) -> None:
        self._head = head
        self._tail = tail
        self._resumed = asyncio.Event()
        self.closed = False

    def resume(self) -> None:
        self._resumed.set()

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._head:
            yield chunk
        await self._resumed.wait()
        for chunk in self._tail:
            yield chunk

    async def aclose(self) -> None:
        self.closed = True


class FailingCloseStream(ChunkedStream):
    """Response body whose close fails."""

    async def aclose(self) -> None:
        raise OSError("connection reset")


def stream_response(stream: httpx.AsyncByteStream) -> httpx.Response:
    """Event-stream response over a custom byte stream."""
    return httpx.Response(
        200, stream=stream, headers={"content-type": "text/event-stream"}
    )
