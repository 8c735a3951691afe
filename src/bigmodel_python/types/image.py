"""
Image generation request and response models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from bigmodel_python.errors import ResponseValidationError
from bigmodel_python.types.base import RequestModel, ResponseModel
from bigmodel_python.types.common import ContentFilter


class ImageRequest(RequestModel):
    """Image generation request.

    Example:
        >>> request = ImageRequest(model="cogview-4", prompt="A cat on a windowsill")
    """

    model: str = Field(description="Model code")
    prompt: str | None = Field(default=None, description="Text description of the image")
    quality: str | None = Field(default=None, description="hd or standard (cogview-4-250304)")
    size: str | None = Field(
        default=None,
        description="e.g. 1024x1024; custom sizes are 512-2048px, multiples of 16",
    )
    watermark_enabled: bool | None = None
    user_id: str | None = None


class ImageResult(BaseModel):
    """A generated image; the URL expires after 30 days."""

    url: str = ""


class ImageResponse(ResponseModel):
    """Image generation result."""

    created: int = 0
    data: list[ImageResult] = Field(default_factory=list)
    content_filter: list[ContentFilter] | None = None

    @property
    def urls(self) -> list[str]:
        return [image.url for image in self.data]

    def validate_structure(self) -> None:
        if not self.data:
            raise ResponseValidationError("no images in response", field="data")
