"""
Streaming layer - SSE line decoding over chunked HTTP responses.
"""

from bigmodel_python.streaming.reader import LineReader
from bigmodel_python.streaming.sse import (
    DATA_PREFIX,
    DONE_LINE,
    LineKind,
    SSELine,
    classify_line,
)
from bigmodel_python.streaming.stream import Stream

__all__ = [
    "DATA_PREFIX",
    "DONE_LINE",
    "LineKind",
    "LineReader",
    "SSELine",
    "Stream",
    "classify_line",
]
