"""错误基类：分层错误体系与结构化错误上下文。

Base error classes for bigmodel-python.

The hierarchy separates the three ways a call can fail so callers can
pattern-match on them:

- ConfigurationError: the client or request could not be set up
- TransportError: the request failed (network, deadline, HTTP status >= 400)
- DecodeError: the request succeeded but the response is unusable

Streaming calls add StreamError for failures surfaced by a single pull.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bigmodel_python.errors.classification import BodyKind, ErrorClass


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Path to the problematic field (e.g., 'choices')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'transport', 'decode', 'stream')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class BigModelError(Exception):
    """Base class for all bigmodel-python errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    prefix: str | None = None

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        text = f"{self.prefix}: {self.message}" if self.prefix else self.message
        ctx_str = str(self.context)
        if ctx_str:
            return f"{text} {ctx_str}"
        return text

    def with_hint(self, hint: str) -> BigModelError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class ConfigurationError(BigModelError):
    """Invalid client configuration.

    Raised when:
    - The auth token is empty
    - A timeout is negative or a duration string cannot be parsed
    - The base URL or request path is unset
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        option: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="config")
        if option:
            ctx.details["option"] = option
        super().__init__(message, ctx)
        self.option = option


class InvalidRequestError(BigModelError):
    """The request object handed to a capability function is unusable."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(message, context or ErrorContext(source="request"))


class TransportError(BigModelError):
    """The request failed.

    Raised when:
    - Network connection failure
    - TLS or proxy errors
    - The call deadline expired (RequestTimeoutError)
    - The API answered with status >= 400 (RemoteError)
    """

    prefix = "request failed"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        if status_code:
            ctx.details["status_code"] = status_code
        super().__init__(message, ctx)
        self.url = url
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause


class RequestTimeoutError(TransportError):
    """The call did not finish before the client's deadline."""

    def __init__(
        self,
        message: str,
        *,
        timeout: float | None = None,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = ErrorContext(source="transport")
        if timeout is not None:
            ctx.details["timeout"] = timeout
        super().__init__(message, ctx, url=url, cause=cause)
        self.timeout = timeout


class RemoteError(TransportError):
    """Error status returned by the API.

    The body is run through the error-body classifier; the classified error
    is attached as ``__cause__``.

    Attributes:
        status_code: HTTP status code
        error_class: Classification derived from the status code
        kind: Shape of the error body (empty, HTML, error envelope, malformed)
        raw_body: Raw response body text
        code: Vendor error code from the error envelope, if any
        request_id: Request ID from the headers or body, if any
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_class: ErrorClass,
        kind: BodyKind,
        raw_body: str = "",
        code: str | None = None,
        request_id: str | None = None,
        url: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="remote")
        ctx.details["error_class"] = error_class.value
        ctx.details["body_kind"] = kind.value
        if code:
            ctx.details["code"] = code
        if request_id:
            ctx.details["request_id"] = request_id
        super().__init__(message, ctx, url=url, status_code=status_code)
        self.error_class = error_class
        self.kind = kind
        self.raw_body = raw_body
        self.code = code
        self.request_id = request_id

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: bytes | str,
        headers: dict[str, str] | None = None,
        *,
        url: str | None = None,
    ) -> RemoteError:
        """Create a RemoteError from an error response.

        Args:
            status_code: HTTP status code
            body: Raw response body
            headers: Response headers
            url: Request URL

        Returns:
            RemoteError with the classified body as its cause
        """
        from bigmodel_python.errors.classification import (
            ErrorEnvelopeError,
            classify_error_body,
            classify_status,
        )

        classified = classify_error_body(body)
        code = None
        message = f"HTTP {status_code}: {classified.message}"
        if isinstance(classified, ErrorEnvelopeError):
            code = classified.code
            if classified.vendor_message:
                message = f"HTTP {status_code}: {classified.vendor_message}"

        request_id = None
        if headers:
            request_id = (
                headers.get("x-request-id")
                or headers.get("request-id")
                or headers.get("X-Request-Id")
            )

        error = cls(
            message,
            status_code=status_code,
            error_class=classify_status(status_code),
            kind=classified.kind,
            raw_body=classified.raw_body,
            code=code,
            request_id=request_id,
            url=url,
        )
        error.__cause__ = classified
        return error


class DecodeError(BigModelError):
    """The request succeeded but its response could not be used."""

    prefix = "error decoding response"

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(message, context or ErrorContext(source="decode"))


class ResponseValidationError(DecodeError):
    """A decoded response is structurally incomplete.

    Raised when:
    - A chat response carries neither a task ID nor a request ID
    - A chat response has no choices
    - An async task response has no task status
    - An image response has no generated images
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        model: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="validation", field_path=field)
        if model:
            ctx.details["model"] = model
        super().__init__(f"invalid response: {message}", ctx)
        self.reason = message
        self.field = field


class StreamError(BigModelError):
    """Error surfaced by a single pull on a stream.

    Events returned before the error stay valid; the caller decides whether
    to keep reading or close the stream.
    """

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(message, context or ErrorContext(source="stream"))


class StreamReadError(StreamError):
    """The underlying response body failed mid-stream."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class StreamDecodeError(StreamError):
    """A ``data:`` payload could not be decoded into the event model.

    Attributes:
        raw_data: The payload text after the ``data: `` prefix
    """

    def __init__(self, message: str, *, raw_data: str) -> None:
        ctx = ErrorContext(source="stream")
        ctx.details["raw_data"] = raw_data
        super().__init__(f"{message}, raw data: {raw_data}", ctx)
        self.raw_data = raw_data


class StreamClosedError(StreamError):
    """The stream was closed; it cannot be read again."""

    def __init__(self, message: str = "stream closed") -> None:
        super().__init__(message)


class StreamTimeoutError(StreamError):
    """The call deadline expired while the stream was being read."""


class TaskError(BigModelError):
    """Base class for async task polling failures."""

    def __init__(self, message: str, *, task_id: str) -> None:
        ctx = ErrorContext(source="task")
        ctx.details["task_id"] = task_id
        super().__init__(message, ctx)
        self.task_id = task_id


class TaskFailedError(TaskError):
    """The vendor reported the task as FAIL."""


class TaskTimeoutError(TaskError):
    """The task did not finish within the polling budget."""
