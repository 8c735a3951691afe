"""异步任务：查询结果并轮询至完成。

Async task result queries and polling.

Chat and video submissions return a task ID; the result is fetched with a
GET on ``paas/v4/async-result/{id}`` until the task leaves PROCESSING.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

from bigmodel_python.client.options import ASYNC_RESULT_PATH
from bigmodel_python.errors import InvalidRequestError, TaskFailedError, TaskTimeoutError
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.chat import ChatAsyncResult
from bigmodel_python.types.common import TaskStatus
from bigmodel_python.types.video import VideoResultResponse

if TYPE_CHECKING:
    from bigmodel_python.client import Client

logger = get_logger(__name__)

# Deadline of a single result query
RESULT_QUERY_TIMEOUT = 5.0

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_MAX_WAIT = 300.0

R = TypeVar("R", ChatAsyncResult, VideoResultResponse)


def _result_path(task_id: str) -> str:
    if not task_id:
        raise InvalidRequestError("task ID must not be empty")
    return ASYNC_RESULT_PATH + task_id


async def get_chat_result(
    client: Client,
    task_id: str,
    *,
    timeout: float | None = RESULT_QUERY_TIMEOUT,
) -> ChatAsyncResult:
    """Fetch the current state of an async chat task.

    The result endpoint is fixed; a path override on the client does not
    apply to it.

    Raises:
        InvalidRequestError: If task_id is empty
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the body is not a usable result
    """
    return await client.send("GET", _result_path(task_id), ChatAsyncResult, timeout=timeout)


async def get_video_result(
    client: Client,
    task_id: str,
    *,
    timeout: float | None = RESULT_QUERY_TIMEOUT,
) -> VideoResultResponse:
    """Fetch the current state of a video generation task.

    Raises:
        InvalidRequestError: If task_id is empty
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the body is not a usable result
    """
    return await client.send("GET", _result_path(task_id), VideoResultResponse, timeout=timeout)


async def wait_for_task(
    client: Client,
    task_id: str,
    fetch: Callable[[Client, str], Awaitable[R]],
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    max_wait: float = DEFAULT_MAX_WAIT,
) -> R:
    """Poll a task until it succeeds, fails or runs out of time.

    Args:
        client: Configured client
        task_id: Task ID from the submission
        fetch: get_chat_result or get_video_result
        interval: Seconds between queries
        max_wait: Total polling budget in seconds

    Returns:
        The SUCCESS result

    Raises:
        TaskFailedError: If the task reports FAIL
        TaskTimeoutError: If the task is still running after max_wait
        TransportError: If a query failed
        DecodeError: If a query returned an unusable body

    Example:
        >>> task = await submit_chat_completion(client, request)
        >>> result = await wait_for_task(client, task.task_id, get_chat_result)
        >>> print(result.content)
    """
    if interval <= 0:
        raise InvalidRequestError(f"poll interval must be positive, got {interval}")

    started = time.monotonic()
    attempts = 0
    while True:
        attempts += 1
        result = await fetch(client, task_id)
        status = result.status
        logger.debug(
            "Task polled",
            task_id=task_id,
            status=result.task_status,
            attempt=attempts,
        )

        if status is TaskStatus.SUCCESS:
            logger.info("Task finished", task_id=task_id, attempts=attempts)
            return result
        if status is TaskStatus.FAIL:
            logger.warning("Task failed", task_id=task_id, attempts=attempts)
            raise TaskFailedError(f"task {task_id} failed", task_id=task_id)

        remaining = max_wait - (time.monotonic() - started)
        if remaining <= 0:
            raise TaskTimeoutError(
                f"task {task_id} still {result.task_status or 'pending'} after {max_wait}s",
                task_id=task_id,
            )
        await asyncio.sleep(min(interval, remaining))
