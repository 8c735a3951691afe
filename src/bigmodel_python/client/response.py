"""
Decoding of non-streaming responses.

The body is read once, decoded into the expected model and structurally
validated. A body that does not decode is handed to the error-body
classifier instead of surfacing the raw pydantic error: the vendor
sometimes returns non-JSON bodies with a success status.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import ValidationError

from bigmodel_python.errors import classify_error_body
from bigmodel_python.types.base import ResponseModel

R = TypeVar("R", bound=ResponseModel)


def decode_response(body: bytes, model: type[R]) -> R:
    """Decode and validate a response body.

    Args:
        body: Raw response body
        model: Expected response model

    Returns:
        The validated response

    Raises:
        ResponseBodyError: If the body is not a valid ``model`` payload
        ResponseValidationError: If the payload is structurally incomplete
    """
    try:
        parsed = model.model_validate_json(body)
    except ValidationError as e:
        raise classify_error_body(body) from e

    parsed.validate_structure()
    return parsed
