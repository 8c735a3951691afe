"""
Async task results - queries and polling for chat and video tasks.
"""

from bigmodel_python.tasks.client import (
    DEFAULT_MAX_WAIT,
    DEFAULT_POLL_INTERVAL,
    RESULT_QUERY_TIMEOUT,
    get_chat_result,
    get_video_result,
    wait_for_task,
)

__all__ = [
    "DEFAULT_MAX_WAIT",
    "DEFAULT_POLL_INTERVAL",
    "RESULT_QUERY_TIMEOUT",
    "get_chat_result",
    "get_video_result",
    "wait_for_task",
]
