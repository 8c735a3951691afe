"""
Chat capability - blocking, streamed and async chat completions.
"""

from bigmodel_python.chat.builder import ChatRequestBuilder
from bigmodel_python.chat.client import (
    create_chat_completion,
    stream_chat_completion,
    submit_chat_completion,
)

__all__ = [
    "ChatRequestBuilder",
    "create_chat_completion",
    "stream_chat_completion",
    "submit_chat_completion",
]
