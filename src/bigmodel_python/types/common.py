"""
Types shared by several capabilities: token usage, moderation results,
web search references, video results and async task status.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from bigmodel_python.errors import ResponseValidationError
from bigmodel_python.types.base import ResponseModel


class TaskStatus(str, Enum):
    """Processing state of an async task."""

    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskStatus.PROCESSING


class PromptTokensDetails(BaseModel):
    """Breakdown of prompt token consumption."""

    cached_tokens: int = Field(default=0, description="Prompt tokens served from cache")


class Usage(BaseModel):
    """Token usage returned at the end of a call.

    A zero-valued Usage stands in when the vendor omits the field.
    """

    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = Field(default=0, description="Input tokens")
    completion_tokens: int = Field(default=0, description="Output tokens")
    total_tokens: int = Field(
        default=0,
        description="Total tokens; for glm-4-voice one second of audio is 12.5 tokens",
    )
    prompt_tokens_details: PromptTokensDetails | None = Field(
        default=None, description="Token consumption details"
    )


class ContentFilter(BaseModel):
    """Content safety information.

    ``role`` is where the filter applied: assistant (inference), user
    (input) or history (context). ``level`` runs 0-3, 0 being most severe.
    """

    role: str = ""
    level: int = 0


class WebSearchResult(BaseModel):
    """A web page referenced by the web search tool."""

    model_config = ConfigDict(extra="allow")

    icon: str | None = None
    title: str | None = None
    link: str | None = None
    media: str | None = None
    publish_date: str | None = None
    content: str | None = None
    refer: str | None = None


class VideoResult(BaseModel):
    """A generated video."""

    url: str = Field(default="", description="Video URL")
    cover_image_url: str = Field(default="", description="Cover image URL")


class AsyncTaskResponse(ResponseModel):
    """Acknowledgement of an async submission (chat or video).

    Attributes:
        id: Task ID used for polling
        request_id: Request ID
        model: Model name
        task_status: PROCESSING, SUCCESS or FAIL
    """

    id: str = ""
    request_id: str = ""
    model: str = ""
    task_status: str = ""

    @property
    def task_id(self) -> str:
        """Identifier to poll with; the task ID, falling back to the request ID."""
        return self.id or self.request_id

    def validate_structure(self) -> None:
        require_identifier(self.id, self.request_id, model=self.model)
        if not self.task_status:
            raise ResponseValidationError(
                "missing task status", field="task_status", model=self.model
            )


def require_identifier(*identifiers: str, model: str | None = None) -> None:
    """Raise unless at least one identifier is non-empty."""
    if not any(identifiers):
        raise ResponseValidationError("missing response ID", field="id", model=model or None)
