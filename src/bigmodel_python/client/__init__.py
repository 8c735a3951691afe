"""
Client layer - configuration, transport wiring and call deadlines.
"""

from bigmodel_python.client.builder import API_KEY_ENV, ClientBuilder
from bigmodel_python.client.cancel import CancelReason, CancelToken
from bigmodel_python.client.core import Client, require_request
from bigmodel_python.client.options import (
    ASYNC_CHAT_COMPLETIONS_PATH,
    ASYNC_RESULT_PATH,
    AUDIO_SPEECH_PATH,
    AUDIO_TRANSCRIPTIONS_PATH,
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_PATH,
    DEFAULT_TIMEOUT,
    IMAGE_GENERATIONS_PATH,
    VIDEO_GENERATIONS_PATH,
    ClientConfig,
    Option,
    parse_duration,
    with_base_url,
    with_path,
    with_proxy,
    with_timeout,
    with_timeout_string,
    with_transport,
)
from bigmodel_python.client.response import decode_response

__all__ = [
    "API_KEY_ENV",
    "ASYNC_CHAT_COMPLETIONS_PATH",
    "ASYNC_RESULT_PATH",
    "AUDIO_SPEECH_PATH",
    "AUDIO_TRANSCRIPTIONS_PATH",
    "CHAT_COMPLETIONS_PATH",
    "DEFAULT_BASE_URL",
    "DEFAULT_PATH",
    "DEFAULT_TIMEOUT",
    "IMAGE_GENERATIONS_PATH",
    "VIDEO_GENERATIONS_PATH",
    "CancelReason",
    "CancelToken",
    "Client",
    "ClientBuilder",
    "ClientConfig",
    "Option",
    "decode_response",
    "parse_duration",
    "require_request",
    "with_base_url",
    "with_path",
    "with_proxy",
    "with_timeout",
    "with_timeout_string",
    "with_transport",
]
