"""
Server-Sent Events line classification.

The vendor stream is one event per line:
```
data: {"id": "...", "choices": [...]}

data: [DONE]
```
Only ``data: `` lines carry payloads. Comments, blank keep-alive lines and
``event:``/``id:`` framing lines are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DATA_PREFIX = "data: "
DONE_LINE = "data: [DONE]"


class LineKind(str, Enum):
    """What a stream line means to the decoder."""

    DATA = "data"
    DONE = "done"
    SKIP = "skip"


@dataclass(frozen=True)
class SSELine:
    """A classified stream line.

    Attributes:
        kind: DATA, DONE or SKIP
        data: Payload after the ``data: `` prefix (DATA only)
    """

    kind: LineKind
    data: str = ""


_DONE = SSELine(LineKind.DONE)
_SKIP = SSELine(LineKind.SKIP)


def classify_line(raw: bytes | str) -> SSELine:
    """Classify one raw line.

    Surrounding whitespace is stripped first. The exact line
    ``data: [DONE]`` ends the stream and takes precedence over decoding;
    a line longer than the prefix that starts with ``data: `` is a payload;
    anything else is skipped.

    Args:
        raw: Line as read from the body

    Returns:
        Classified line
    """
    line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    line = line.strip()

    if line == DONE_LINE:
        return _DONE

    if len(line) > len(DATA_PREFIX) and line.startswith(DATA_PREFIX):
        return SSELine(LineKind.DATA, line[len(DATA_PREFIX) :])

    return _SKIP
