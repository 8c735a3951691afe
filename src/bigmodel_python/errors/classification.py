"""错误分类模块：按状态码与响应体形态对失败响应进行归类。

Error classification for BigModel responses.

Two independent classifications are applied to a failed response:

- ErrorClass, derived from the HTTP status code
- BodyKind, derived from the shape of the raw body; the vendor does not
  consistently return structured errors, so this is a best-effort heuristic
  rather than a schema validator
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from bigmodel_python.errors.base import DecodeError, ErrorContext

_HTML_DOCTYPE = "<!doctype html>"
_ERROR_ENVELOPE_MARKER = '{"error"'


class ErrorClass(str, Enum):
    """Classification of an HTTP error status."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request body or invalid parameters."""

    AUTHENTICATION = "authentication"
    """Missing or invalid API key."""

    PERMISSION_DENIED = "permission_denied"
    """Caller is authenticated but not permitted to access the resource."""

    NOT_FOUND = "not_found"
    """Wrong path, unknown task ID or nonexistent model."""

    RATE_LIMITED = "rate_limited"
    """Throttled by request or token limits."""

    REQUEST_TOO_LARGE = "request_too_large"
    """Payload too large (e.g., audio file over the upload limit)."""

    TIMEOUT = "timeout"
    """Gateway or upstream timeout."""

    SERVER_ERROR = "server_error"
    """Server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service temporarily unavailable."""

    OTHER = "other"
    """Unknown classification."""


class BodyKind(str, Enum):
    """Shape of a response body that could not be decoded."""

    EMPTY = "empty"
    HTML = "html"
    ERROR_ENVELOPE = "error_envelope"
    MALFORMED_JSON = "malformed_json"


_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    408: ErrorClass.TIMEOUT,
    413: ErrorClass.REQUEST_TOO_LARGE,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    500: ErrorClass.SERVER_ERROR,
    502: ErrorClass.SERVER_ERROR,
    503: ErrorClass.OVERLOADED,
    504: ErrorClass.TIMEOUT,
}


def classify_status(status_code: int) -> ErrorClass:
    """Classify an HTTP error status into an ErrorClass.

    Args:
        status_code: HTTP status code

    Returns:
        ErrorClass representing the error type
    """
    if status_code in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status_code]

    if 400 <= status_code < 500:
        return ErrorClass.INVALID_REQUEST
    if 500 <= status_code < 600:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


class ResponseBodyError(DecodeError):
    """A response body that could not be decoded into the expected model.

    Attributes:
        kind: Shape of the body
        raw_body: Raw body text
    """

    kind: BodyKind = BodyKind.MALFORMED_JSON

    def __init__(self, message: str, raw_body: str = "") -> None:
        ctx = ErrorContext(source="decode")
        ctx.details["body_kind"] = self.kind.value
        super().__init__(message, ctx)
        self.raw_body = raw_body


class EmptyBodyError(ResponseBodyError):
    """The response body was empty."""

    kind = BodyKind.EMPTY

    def __init__(self) -> None:
        super().__init__("empty body")


class HtmlResponseError(ResponseBodyError):
    """The response body was an HTML page."""

    kind = BodyKind.HTML

    def __init__(self, raw_body: str) -> None:
        super().__init__(
            "unexpected HTML response, likely wrong path or nonexistent model",
            raw_body,
        )


class ErrorEnvelopeError(ResponseBodyError):
    """The response body was the vendor's ``{"error": {...}}`` envelope.

    Attributes:
        code: Vendor error code, if the envelope could be parsed
        vendor_message: Vendor error message, if the envelope could be parsed
    """

    kind = BodyKind.ERROR_ENVELOPE

    def __init__(
        self,
        raw_body: str,
        *,
        code: str | None = None,
        vendor_message: str | None = None,
    ) -> None:
        super().__init__(f"cannot parse JSON: {raw_body}", raw_body)
        self.code = code
        self.vendor_message = vendor_message
        if code:
            self.context.details["code"] = code


class MalformedJsonError(ResponseBodyError):
    """The response body was neither valid JSON nor a recognizable error."""

    kind = BodyKind.MALFORMED_JSON

    def __init__(self, raw_body: str) -> None:
        super().__init__(f"unexpected end of JSON input. {raw_body}", raw_body)


def classify_error_body(body: bytes | str) -> ResponseBodyError:
    """Classify a body that failed to decode.

    Rules, checked in order:
    - empty body
    - body starting with an HTML doctype (case-insensitive)
    - body containing ``{"error"``
    - anything else is treated as malformed or truncated JSON

    Args:
        body: Raw response body

    Returns:
        The ResponseBodyError matching the body's shape

    Example:
        >>> classify_error_body(b"").kind
        <BodyKind.EMPTY: 'empty'>
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

    if not text:
        return EmptyBodyError()

    if text.lstrip()[: len(_HTML_DOCTYPE)].lower() == _HTML_DOCTYPE:
        return HtmlResponseError(text)

    if _ERROR_ENVELOPE_MARKER in text:
        code, message = _parse_error_envelope(text)
        return ErrorEnvelopeError(text, code=code, vendor_message=message)

    return MalformedJsonError(text)


def _parse_error_envelope(text: str) -> tuple[str | None, str | None]:
    """Pull the code and message out of an error envelope when it is valid JSON."""
    try:
        data = json.loads(text)
    except ValueError:
        return None, None
    if not isinstance(data, dict):
        return None, None

    code = None
    error = data.get("error")
    if isinstance(error, dict):
        raw_code = error.get("code")
        if raw_code is not None:
            code = str(raw_code)
    return code, extract_error_message(data)


def extract_error_message(body: dict[str, Any] | None) -> str | None:
    """Extract the error message from a parsed response body.

    Supports:
    - Envelope: {"error": {"code": "1211", "message": "..."}}
    - Plain: {"error": "..."}
    - Simple: {"message": "..."}

    Args:
        body: Response body (parsed JSON)

    Returns:
        Error message if found, None otherwise
    """
    if not body:
        return None

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            msg = error.get("message")
            if isinstance(msg, str):
                return msg
        elif isinstance(error, str):
            return error

    if "message" in body:
        msg = body["message"]
        if isinstance(msg, str):
            return msg

    return None
