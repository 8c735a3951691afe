"""
Audio transcription and speech synthesis models.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from bigmodel_python.errors import InvalidRequestError
from bigmodel_python.types.base import RequestModel, ResponseModel
from bigmodel_python.types.common import require_identifier


class TranscriptionRequest(RequestModel):
    """Audio transcription request, sent as multipart/form-data.

    Supply the audio either as ``file`` bytes (``file_name`` then only names
    the upload) or through ``file_name`` as a path to read. Accepted
    formats are .wav and .mp3, at most 25 MB and 60 seconds.

    Example:
        >>> request = TranscriptionRequest(model="glm-asr", file_name="meeting.wav")
    """

    model: str = Field(description="Model code")
    file_name: str | None = Field(default=None, description="Audio file path or upload name")
    file: bytes | None = Field(default=None, repr=False, description="Raw audio bytes")
    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    stream: bool | None = None
    request_id: str | None = None
    user_id: str | None = None

    def form_fields(self) -> dict[str, str]:
        """Non-file form fields."""
        data = {"model": self.model}
        if self.temperature is not None:
            data["temperature"] = str(self.temperature)
        if self.stream:
            data["stream"] = "true"
        if self.request_id:
            data["request_id"] = self.request_id
        if self.user_id:
            data["user_id"] = self.user_id
        return data

    def file_part(self) -> tuple[str, bytes, str]:
        """The ``file`` part as (filename, content, content type).

        Raises:
            InvalidRequestError: If no audio was supplied or the file cannot be read
        """
        if self.file is not None:
            name = Path(self.file_name).name if self.file_name else "audio.wav"
            content = self.file
        elif self.file_name:
            path = Path(self.file_name)
            try:
                content = path.read_bytes()
            except OSError as e:
                raise InvalidRequestError(f"cannot read audio file {path}: {e}") from e
            name = path.name
        else:
            raise InvalidRequestError("no audio supplied: set file or file_name")

        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return name, content, content_type


class TranscriptionSegment(BaseModel):
    """A single segment of transcription."""

    id: int = 0
    start: float = 0.0
    end: float = 0.0
    text: str = ""


class TranscriptionResponse(ResponseModel):
    """Transcription result."""

    id: str = ""
    request_id: str = ""
    model: str = ""
    created: int = 0
    segments: list[TranscriptionSegment] | None = None
    text: str = ""

    def validate_structure(self) -> None:
        require_identifier(self.id, self.request_id, model=self.model)


class TranscriptionEventType(str, Enum):
    """Event types of a streamed transcription."""

    DELTA = "transcript.text.delta"
    DONE = "transcript.text.done"


class TranscriptionChunk(ResponseModel):
    """One event of a streamed transcription.

    ``delta`` carries the new text; ``text`` the full transcript on the
    final event.
    """

    id: str = ""
    model: str = ""
    created: int = 0
    delta: str = ""
    text: str = ""
    type: str = ""

    @property
    def is_done(self) -> bool:
        return self.type == TranscriptionEventType.DONE


class SpeechRequest(RequestModel):
    """Speech synthesis request.

    Example:
        >>> request = SpeechRequest(model="cogtts", input="你好", voice="tongtong")
    """

    model: str = Field(description="Model code")
    input: str = Field(description="Text to synthesize")
    voice: str = Field(default="tongtong", description="Voice style")
    response_format: str | None = Field(default=None, description="Output format, e.g. wav")
    watermark_enabled: bool | None = None


class AudioFormat(str, Enum):
    """Output audio format."""

    WAV = "wav"
    MP3 = "mp3"
    PCM = "pcm"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"

    @classmethod
    def from_str(cls, s: str | None, default: AudioFormat | None = None) -> AudioFormat:
        """Map a format name or MIME subtype to an AudioFormat."""
        fallback = default or cls.WAV
        if not s:
            return fallback
        name = s.lower().split(";")[0].strip()
        name = name.rsplit("/", 1)[-1]
        aliases = {"mpeg": cls.MP3, "x-wav": cls.WAV, "wave": cls.WAV}
        if name in aliases:
            return aliases[name]
        try:
            return cls(name)
        except ValueError:
            return fallback


@dataclass
class AudioOutput:
    """Audio returned by speech synthesis."""

    data: bytes
    format: AudioFormat = AudioFormat.WAV
    content_type: str | None = None

    def save(self, path: str | Path) -> Path:
        """Write the audio to ``path`` and return it."""
        target = Path(path)
        target.write_bytes(self.data)
        return target
