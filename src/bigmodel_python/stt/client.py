"""语音转文本：上传音频并返回转写结果，支持流式。

STT (Speech-to-Text) calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bigmodel_python.client.core import require_request
from bigmodel_python.client.options import AUDIO_TRANSCRIPTIONS_PATH
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.audio import TranscriptionChunk, TranscriptionResponse

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.streaming import Stream
    from bigmodel_python.types.audio import TranscriptionRequest

logger = get_logger(__name__)


def _multipart(request: TranscriptionRequest, *, stream: bool) -> tuple[dict[str, str], dict[str, Any]]:
    if stream and not request.stream:
        request = request.model_copy(update={"stream": True})
    data = request.form_fields()
    files = {"file": request.file_part()}
    return data, files


async def transcribe(
    client: Client,
    request: TranscriptionRequest,
    *,
    timeout: float | None = None,
) -> TranscriptionResponse:
    """Transcribe an audio file.

    Args:
        client: Configured client
        request: Audio and options; the audio is uploaded as the ``file`` part
        timeout: Per-call deadline overriding the client's

    Returns:
        Transcription result

    Raises:
        InvalidRequestError: If request is None or the audio cannot be read
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the body is not a usable transcription
    """
    require_request(request, "transcription")
    data, files = _multipart(request, stream=False)
    response = await client.send(
        "POST",
        client.resolve_path(AUDIO_TRANSCRIPTIONS_PATH),
        TranscriptionResponse,
        data=data,
        files=files,
        timeout=timeout,
    )
    logger.debug("Transcription received", model=response.model, chars=len(response.text))
    return response


async def stream_transcription(
    client: Client,
    request: TranscriptionRequest,
    *,
    timeout: float | None = None,
) -> Stream[TranscriptionChunk]:
    """Transcribe an audio file, streaming text deltas as they are produced.

    The ``stream`` form field is forced on.

    Example:
        >>> async with await stream_transcription(client, request) as stream:
        ...     async for chunk in stream:
        ...         print(chunk.delta, end="")

    Raises:
        InvalidRequestError: If request is None or the audio cannot be read
        TransportError: If the request failed or the server returned an error status
    """
    require_request(request, "transcription stream")
    data, files = _multipart(request, stream=True)
    return await client.open_stream(
        "POST",
        client.resolve_path(AUDIO_TRANSCRIPTIONS_PATH),
        TranscriptionChunk,
        data=data,
        files=files,
        timeout=timeout,
    )
