"""
Video generation request and response models.
"""

from __future__ import annotations

from pydantic import Field

from bigmodel_python.errors import ResponseValidationError
from bigmodel_python.types.base import RequestModel, ResponseModel
from bigmodel_python.types.common import AsyncTaskResponse, TaskStatus, VideoResult


class VideoRequest(RequestModel):
    """Video generation request.

    Either ``prompt`` or ``image_url`` (or both) must be given. Several
    fields only apply to some models (cogvideox-*, vidu*).
    """

    model: str = Field(description="Model code")
    prompt: str | None = Field(default=None, description="Text description, max 1500 characters")
    request_id: str | None = None
    style: str | None = Field(default=None, description="general or anime (viduq1-text)")
    quality: str | None = Field(default=None, description="quality or speed")
    with_audio: bool | None = Field(default=None, description="Generate AI sound effects")
    watermark_enabled: bool | None = None
    aspect_ratio: str | None = Field(default=None, description="16:9, 9:16 or 1:1")
    image_url: str | list[str] | None = Field(
        default=None,
        description="Source image(s) by URL or base64; lists are used by start-end and reference models",
    )
    size: str | None = Field(default=None, description="e.g. 1920x1080, up to 3840x2160")
    movement_amplitude: str | None = Field(
        default=None, description="auto, small, medium or large"
    )
    fps: int | None = Field(default=None, description="30 or 60")
    duration: int | None = Field(default=None, description="Seconds: 5 or 10")
    user_id: str | None = None


class VideoSubmission(AsyncTaskResponse):
    """Acknowledgement of a video generation submission."""


class VideoResultResponse(ResponseModel):
    """Result of polling a video generation task."""

    model: str = ""
    request_id: str = ""
    task_status: str = ""
    video_result: list[VideoResult] = Field(default_factory=list)

    @property
    def status(self) -> TaskStatus | None:
        try:
            return TaskStatus(self.task_status)
        except ValueError:
            return None

    def validate_structure(self) -> None:
        if not self.request_id:
            raise ResponseValidationError(
                "missing response ID", field="request_id", model=self.model or None
            )
