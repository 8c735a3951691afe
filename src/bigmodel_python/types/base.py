"""
Base models for request and response payloads.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Base for outbound request bodies.

    Unset optional fields are None and are left out of the payload, which
    matches the vendor's "omit empty" semantics.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Payload as a JSON-compatible dict."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)

    def to_json(self) -> bytes:
        """Payload as UTF-8 JSON; non-ASCII and ``<>&`` are written literally."""
        return self.model_dump_json(exclude_none=True, by_alias=True).encode("utf-8")


class ResponseModel(BaseModel):
    """Base for decoded response bodies.

    Unknown fields are kept so new vendor fields are not lost.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def validate_structure(self) -> None:
        """Check fields the JSON schema cannot express.

        Raises:
            ResponseValidationError: If the response is structurally incomplete
        """
