"""
Chat completion request, response and stream chunk models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from bigmodel_python.errors import ResponseValidationError
from bigmodel_python.types.base import RequestModel, ResponseModel
from bigmodel_python.types.common import (
    ContentFilter,
    TaskStatus,
    Usage,
    VideoResult,
    WebSearchResult,
    require_identifier,
)
from bigmodel_python.types.message import ChatMessage, Message
from bigmodel_python.types.tool import Tool


class Thinking(BaseModel):
    """Chain-of-thought switch (GLM-4.5 and later)."""

    type: str = Field(default="enabled", description="enabled or disabled")


class ResponseFormat(BaseModel):
    """Output format: text or json_object."""

    type: str = "text"


class ChatCompletionRequest(RequestModel):
    """Chat completion request.

    Example:
        >>> request = ChatCompletionRequest(
        ...     model="glm-4-flash",
        ...     messages=[ChatMessage.user("Hello!")],
        ...     temperature=0.7,
        ... )
    """

    model: str = Field(description="Model code")
    messages: list[ChatMessage] = Field(description="Conversation, oldest first")
    request_id: str | None = Field(default=None, description="Client-supplied unique request ID")
    do_sample: bool | None = Field(
        default=None, description="False selects greedy decoding and ignores temperature/top_p"
    )
    stream: bool | None = Field(default=None, description="Stream the reply as server-sent events")
    thinking: Thinking | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    max_tokens: int | None = Field(default=None, gt=0)
    tools: list[Tool] | None = None
    tool_choice: str | None = None
    user_id: str | None = Field(default=None, description="End user ID, 6 to 128 characters")
    stop: list[str] | None = None
    response_format: ResponseFormat | None = None


class Choice(BaseModel):
    """One generated reply."""

    index: int = 0
    message: Message = Field(default_factory=Message)
    finish_reason: str | None = Field(
        default=None, description="stop, tool_calls, length, sensitive or network_error"
    )


class ChatCompletionResponse(ResponseModel):
    """Chat completion result.

    Attributes:
        id: Task ID
        request_id: Request ID
        created: Unix timestamp (seconds)
        model: Model name
        choices: Generated replies
        usage: Token usage (zero-valued when absent)
    """

    id: str = ""
    request_id: str = ""
    created: int = 0
    model: str = ""
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    video_result: list[VideoResult] | None = None
    web_search: list[WebSearchResult] | None = None
    content_filter: list[ContentFilter] | None = None

    @field_validator("usage", mode="before")
    @classmethod
    def zero_usage_when_missing(cls, value: Any) -> Any:
        return Usage() if value is None else value

    @property
    def content(self) -> str:
        """Text of the first choice."""
        return self.choices[0].message.text if self.choices else ""

    @property
    def finish_reason(self) -> str:
        """Finish reason of the first choice."""
        return (self.choices[0].finish_reason or "") if self.choices else ""

    def validate_structure(self) -> None:
        require_identifier(self.id, self.request_id, model=self.model)
        if not self.choices:
            raise ResponseValidationError(
                "no choices in response", field="choices", model=self.model
            )


class ChatAsyncResult(ChatCompletionResponse):
    """Result of polling an async chat task.

    Choices are only present once the task reached SUCCESS.
    """

    task_status: str = ""

    @property
    def status(self) -> TaskStatus | None:
        try:
            return TaskStatus(self.task_status)
        except ValueError:
            return None

    def validate_structure(self) -> None:
        require_identifier(self.id, self.request_id, model=self.model)
        if self.task_status == TaskStatus.SUCCESS and not self.choices:
            raise ResponseValidationError(
                "no choices in response", field="choices", model=self.model
            )


class StreamChoice(BaseModel):
    """Incremental reply in a stream chunk."""

    index: int = 0
    delta: Message = Field(default_factory=Message)
    finish_reason: str | None = None


class ChatCompletionChunk(ResponseModel):
    """One event of a streamed chat completion.

    ``usage`` is zero-valued on every chunk except, usually, the last.
    """

    id: str = ""
    request_id: str = ""
    created: int = 0
    model: str = ""
    choices: list[StreamChoice] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    video_result: list[VideoResult] | None = None
    web_search: list[WebSearchResult] | None = None
    content_filter: list[ContentFilter] | None = None

    @field_validator("usage", mode="before")
    @classmethod
    def zero_usage_when_missing(cls, value: Any) -> Any:
        return Usage() if value is None else value

    @property
    def delta_text(self) -> str:
        """Text delta of the first choice."""
        return self.choices[0].delta.text if self.choices else ""
