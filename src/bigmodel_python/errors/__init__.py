"""错误体系：区分配置、请求、解码与流式读取四类失败。

Error hierarchy for bigmodel-python.
"""

from bigmodel_python.errors.base import (
    BigModelError,
    ConfigurationError,
    DecodeError,
    ErrorContext,
    InvalidRequestError,
    RemoteError,
    RequestTimeoutError,
    ResponseValidationError,
    StreamClosedError,
    StreamDecodeError,
    StreamError,
    StreamReadError,
    StreamTimeoutError,
    TaskError,
    TaskFailedError,
    TaskTimeoutError,
    TransportError,
)
from bigmodel_python.errors.classification import (
    BodyKind,
    EmptyBodyError,
    ErrorClass,
    ErrorEnvelopeError,
    HtmlResponseError,
    MalformedJsonError,
    ResponseBodyError,
    classify_error_body,
    classify_status,
    extract_error_message,
)

__all__ = [
    # Base errors
    "BigModelError",
    "ConfigurationError",
    "ErrorContext",
    "InvalidRequestError",
    # Transport
    "RemoteError",
    "RequestTimeoutError",
    "TransportError",
    # Decode
    "DecodeError",
    "EmptyBodyError",
    "ErrorEnvelopeError",
    "HtmlResponseError",
    "MalformedJsonError",
    "ResponseBodyError",
    "ResponseValidationError",
    # Stream
    "StreamClosedError",
    "StreamDecodeError",
    "StreamError",
    "StreamReadError",
    "StreamTimeoutError",
    # Tasks
    "TaskError",
    "TaskFailedError",
    "TaskTimeoutError",
    # Classification
    "BodyKind",
    "ErrorClass",
    "classify_error_body",
    "classify_status",
    "extract_error_message",
]
