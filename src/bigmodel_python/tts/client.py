"""TTS 客户端：用于文本转语音调用。

TTS (Text-to-Speech) calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bigmodel_python.client.core import require_request
from bigmodel_python.client.options import AUDIO_SPEECH_PATH
from bigmodel_python.errors import EmptyBodyError
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.audio import AudioFormat, AudioOutput

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.types.audio import SpeechRequest

logger = get_logger(__name__)


async def synthesize_speech(
    client: Client,
    request: SpeechRequest,
    *,
    timeout: float | None = None,
) -> AudioOutput:
    """Synthesize text to audio.

    The format comes from the response Content-Type, falling back to the
    requested ``response_format`` and then WAV.

    Returns:
        AudioOutput with raw bytes and format

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
        EmptyBodyError: If the server returned no audio
    """
    require_request(request, "speech synthesis")
    response = await client.request(
        "POST",
        client.resolve_path(AUDIO_SPEECH_PATH),
        body=request,
        timeout=timeout,
    )
    data = response.content
    if not data:
        raise EmptyBodyError()

    content_type = response.headers.get("content-type")
    requested = AudioFormat.from_str(request.response_format)
    fmt = requested
    if content_type and content_type.startswith("audio/"):
        fmt = AudioFormat.from_str(content_type, default=requested)

    logger.debug("Speech synthesized", size=len(data), format=fmt.value)
    return AudioOutput(data=data, format=fmt, content_type=content_type)
