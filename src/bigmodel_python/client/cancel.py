"""
Stream cancellation control.

A CancelToken is the cancellable context a Stream derives from its call
deadline. Closing the stream cancels it; expiry of the deadline cancels it
with CancelReason.TIMEOUT. Either way a read waiting on the token unblocks.
"""

from __future__ import annotations

import asyncio
from enum import Enum

from bigmodel_python.telemetry import get_logger

logger = get_logger(__name__)


class CancelReason(str, Enum):
    """Reasons for cancellation."""

    USER_REQUEST = "user_request"
    TIMEOUT = "timeout"
    END_OF_STREAM = "end_of_stream"


class CancelToken:
    """Cancellation token for a streaming call.

    Example:
        >>> token = CancelToken(timeout=30.0)
        >>> token.cancel()
        True
        >>> token.cancel()
        False
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize cancellation token.

        Args:
            timeout: Seconds until the token cancels itself with
                CancelReason.TIMEOUT; None or 0 disables it
        """
        self._reason: CancelReason | None = None
        self._event = asyncio.Event()
        self._timeout = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None

        if timeout:
            self._start_timeout(timeout)

    def _start_timeout(self, timeout: float) -> None:
        """Schedule the deadline on the running loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop: the deadline cannot be scheduled
            logger.warning("CancelToken created outside an event loop; timeout ignored")
            return
        self._timeout_handle = loop.call_later(
            max(timeout, 0.0), self.cancel, CancelReason.TIMEOUT
        )

    def cancel(self, reason: CancelReason = CancelReason.USER_REQUEST) -> bool:
        """Request cancellation.

        Args:
            reason: Reason for cancellation

        Returns:
            True if cancellation was newly requested, False if already cancelled
        """
        if self._reason is not None:
            return False

        self._reason = reason
        self._event.set()

        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

        return True

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._reason is not None

    @property
    def reason(self) -> CancelReason | None:
        """Get cancellation reason."""
        return self._reason

    @property
    def timeout(self) -> float | None:
        """Deadline this token was created with, in seconds."""
        return self._timeout

    async def wait(self) -> CancelReason:
        """Wait until cancellation is requested.

        Returns:
            Cancellation reason
        """
        await self._event.wait()
        return self._reason or CancelReason.USER_REQUEST
