"""
Chat message types.

Message content is either plain text or a list of typed content parts;
parts are discriminated by their ``type`` field:
- text: Plain text
- image_url: Image by URL or base64 data URI
- video_url: Video by URL
- file_url: Document by URL
- input_audio: Base64 audio with its format
"""

from __future__ import annotations

import base64
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from bigmodel_python.types.tool import ToolCall


class MessageRole(str, Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class MediaUrl(BaseModel):
    """URL wrapper used by image, video and file parts."""

    url: str


class InputAudio(BaseModel):
    """Inline audio data."""

    data: str = Field(description="Base64 encoded audio")
    format: str = Field(default="wav", description="Audio format: wav or mp3")


class TextPart(BaseModel):
    """Text content part."""

    type: Literal["text"] = "text"
    text: str


class ImageUrlPart(BaseModel):
    """Image content part."""

    type: Literal["image_url"] = "image_url"
    image_url: MediaUrl

    @classmethod
    def from_file(cls, path: str | Path) -> ImageUrlPart:
        """Embed a local image as a base64 data URI.

        Args:
            path: Path to the image file

        Returns:
            ImageUrlPart carrying the encoded image
        """
        file_path = Path(path)
        encoded = base64.standard_b64encode(file_path.read_bytes()).decode("ascii")
        media_type = mimetypes.guess_type(file_path.name)[0] or "image/png"
        return cls(image_url=MediaUrl(url=f"data:{media_type};base64,{encoded}"))


class VideoUrlPart(BaseModel):
    """Video content part."""

    type: Literal["video_url"] = "video_url"
    video_url: MediaUrl


class FileUrlPart(BaseModel):
    """Document content part."""

    type: Literal["file_url"] = "file_url"
    file_url: MediaUrl


class InputAudioPart(BaseModel):
    """Audio content part."""

    type: Literal["input_audio"] = "input_audio"
    input_audio: InputAudio


ContentPart = Annotated[
    Union[TextPart, ImageUrlPart, VideoUrlPart, FileUrlPart, InputAudioPart],
    Field(discriminator="type"),
]

MessageContent = Union[str, list[ContentPart]]


class ChatMessage(BaseModel):
    """A message in the conversation sent to the model.

    Example:
        >>> msgs = [
        ...     ChatMessage.system("You are a helpful assistant."),
        ...     ChatMessage.user("Describe this image"),
        ...     ChatMessage.user([text("What is this?"), image_url("https://...")]),
        ... ]
    """

    model_config = ConfigDict(populate_by_name=True)

    role: MessageRole = Field(description="Message role")
    content: MessageContent | None = Field(default=None, description="Message content")
    tool_call_id: str | None = Field(
        default=None, description="Tool call this message answers (role=tool)"
    )
    tool_calls: list[ToolCall] | None = Field(
        default=None, description="Tool calls made by the assistant"
    )

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: MessageContent) -> ChatMessage:
        """Create a user message (text or content parts)."""
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(
        cls,
        content: MessageContent | None = None,
        tool_calls: list[ToolCall] | None = None,
    ) -> ChatMessage:
        """Create an assistant message, optionally carrying tool calls."""
        return cls(role=MessageRole.ASSISTANT, content=content, tool_calls=tool_calls)

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> ChatMessage:
        """Create a tool result message."""
        return cls(role=MessageRole.TOOL, content=content, tool_call_id=tool_call_id)


class AudioReply(BaseModel):
    """Audio returned by voice models such as glm-4-voice."""

    id: str = ""
    data: str | None = Field(default=None, description="Base64 encoded audio")
    expires_at: str | None = None


class Message(BaseModel):
    """A message generated by the model.

    ``content`` is None when the model calls a tool. Vision models may
    return content parts instead of text.
    """

    model_config = ConfigDict(extra="allow")

    role: str = MessageRole.ASSISTANT.value
    content: MessageContent | None = None
    reasoning_content: str | None = Field(
        default=None, description="Chain-of-thought output of reasoning models"
    )
    audio: AudioReply | None = None
    tool_calls: list[ToolCall] | None = None

    @property
    def text(self) -> str:
        """Concatenated text content; empty when there is none."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text for p in self.content if isinstance(p, TextPart))

    def to_chat_message(self) -> ChatMessage:
        """Turn this reply into a message for the next turn of the conversation."""
        return ChatMessage.assistant(self.content, tool_calls=self.tool_calls)


def text(value: str) -> TextPart:
    """Create a text content part."""
    return TextPart(text=value)


def image_url(url: str) -> ImageUrlPart:
    """Create an image content part from a URL or data URI."""
    return ImageUrlPart(image_url=MediaUrl(url=url))


def video_url(url: str) -> VideoUrlPart:
    """Create a video content part."""
    return VideoUrlPart(video_url=MediaUrl(url=url))


def file_url(url: str) -> FileUrlPart:
    """Create a document content part."""
    return FileUrlPart(file_url=MediaUrl(url=url))


def input_audio(data: str | bytes, format: str = "wav") -> InputAudioPart:
    """Create an audio content part; raw bytes are base64 encoded."""
    if isinstance(data, bytes):
        data = base64.standard_b64encode(data).decode("ascii")
    return InputAudioPart(input_audio=InputAudio(data=data, format=format))
