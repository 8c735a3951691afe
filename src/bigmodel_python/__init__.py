"""智谱 BigModel 开放平台 Python 异步客户端。

bigmodel-python: async client for the BigModel (open.bigmodel.cn) API.

Chat completions (blocking, streamed and async), image generation, video
generation, speech transcription and speech synthesis over one
option-configured Client.
"""
from __future__ import annotations

__version__ = "0.1.0"

from bigmodel_python.chat import (
    ChatRequestBuilder,
    create_chat_completion,
    stream_chat_completion,
    submit_chat_completion,
)
from bigmodel_python.client import (
    Client,
    ClientBuilder,
    with_base_url,
    with_path,
    with_proxy,
    with_timeout,
    with_timeout_string,
    with_transport,
)
from bigmodel_python.config import ClientSettings
from bigmodel_python.errors import (
    BigModelError,
    ConfigurationError,
    DecodeError,
    InvalidRequestError,
    RemoteError,
    StreamError,
    TransportError,
)
from bigmodel_python.image import generate_image
from bigmodel_python.streaming import Stream
from bigmodel_python.stt import stream_transcription, transcribe
from bigmodel_python.tasks import get_chat_result, get_video_result, wait_for_task
from bigmodel_python.telemetry import configure_logging, get_logger
from bigmodel_python.tts import synthesize_speech
from bigmodel_python.types import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ImageRequest,
    ImageResponse,
    SpeechRequest,
    TranscriptionRequest,
    TranscriptionResponse,
    VideoRequest,
    VideoResultResponse,
)
from bigmodel_python.video import generate_video, submit_video_generation

__all__ = [
    # Client
    "Client",
    "ClientBuilder",
    "ClientSettings",
    "with_base_url",
    "with_path",
    "with_proxy",
    "with_timeout",
    "with_timeout_string",
    "with_transport",
    # Chat
    "ChatRequestBuilder",
    "create_chat_completion",
    "stream_chat_completion",
    "submit_chat_completion",
    # Image / video
    "generate_image",
    "generate_video",
    "submit_video_generation",
    # Tasks
    "get_chat_result",
    "get_video_result",
    "wait_for_task",
    # Audio
    "stream_transcription",
    "synthesize_speech",
    "transcribe",
    # Streaming
    "Stream",
    # Types
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "ImageRequest",
    "ImageResponse",
    "SpeechRequest",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "VideoRequest",
    "VideoResultResponse",
    # Errors
    "BigModelError",
    "ConfigurationError",
    "DecodeError",
    "InvalidRequestError",
    "RemoteError",
    "StreamError",
    "TransportError",
    # Logging
    "configure_logging",
    "get_logger",
    # Version
    "__version__",
]
