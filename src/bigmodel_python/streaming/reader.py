"""
Buffered line reader over an async byte stream.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class LineReader:
    """Reads ``\\n``-terminated lines from chunked bytes.

    Chunk boundaries are arbitrary: a line may span several chunks and a
    chunk may hold several lines. Bytes after the last newline are not a
    line; when the input ends they are dropped and exposed as ``leftover``.

    Example:
        >>> reader = LineReader(response.aiter_bytes())
        >>> while (line := await reader.readline()) is not None:
        ...     handle(line)
    """

    def __init__(self, chunks: AsyncIterator[bytes]) -> None:
        """Initialize the reader.

        Args:
            chunks: Async iterator of raw body chunks
        """
        self._chunks = chunks
        self._buffer = bytearray()
        # Bytes of _buffer already known to hold no newline
        self._scanned = 0
        self._eof = False
        self._leftover = b""

    @property
    def at_eof(self) -> bool:
        """True once the input is exhausted and no complete line remains."""
        return self._eof and not self.has_buffered_line

    @property
    def has_buffered_line(self) -> bool:
        """True when readline() can return without touching the input."""
        return self._buffer.find(b"\n", self._scanned) >= 0

    @property
    def leftover(self) -> bytes:
        """Unterminated bytes dropped at end of input."""
        return self._leftover

    async def readline(self) -> bytes | None:
        """Read the next line, including its trailing newline.

        Returns:
            The line, or None at end of input

        Raises:
            Whatever the underlying iterator raises on a read failure
        """
        while True:
            idx = self._buffer.find(b"\n", self._scanned)
            if idx >= 0:
                line = bytes(self._buffer[: idx + 1])
                del self._buffer[: idx + 1]
                self._scanned = 0
                return line
            self._scanned = len(self._buffer)

            if self._eof:
                if self._buffer:
                    self._leftover = bytes(self._buffer)
                    self._buffer.clear()
                    self._scanned = 0
                return None

            try:
                chunk = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._eof = True
                continue
            self._buffer.extend(chunk)
