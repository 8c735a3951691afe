"""
Video generation.

Video generation is always asynchronous on the server. The async variant
returns the submission; the sync variant submits and then polls the
result endpoint until the task completes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bigmodel_python.client.core import require_request
from bigmodel_python.client.options import VIDEO_GENERATIONS_PATH
from bigmodel_python.tasks.client import (
    DEFAULT_MAX_WAIT,
    DEFAULT_POLL_INTERVAL,
    get_video_result,
    wait_for_task,
)
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.video import VideoSubmission

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.types.video import VideoRequest, VideoResultResponse

logger = get_logger(__name__)


async def submit_video_generation(
    client: Client,
    request: VideoRequest,
    *,
    timeout: float | None = None,
) -> VideoSubmission:
    """Submit a video generation task.

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the acknowledgement lacks an ID or task status
    """
    require_request(request, "video generation")
    submission = await client.send(
        "POST",
        client.resolve_path(VIDEO_GENERATIONS_PATH),
        VideoSubmission,
        body=request,
        timeout=timeout,
    )
    logger.info("Video task submitted", task_id=submission.task_id, model=submission.model)
    return submission


async def generate_video(
    client: Client,
    request: VideoRequest,
    *,
    timeout: float | None = None,
    interval: float = DEFAULT_POLL_INTERVAL,
    max_wait: float = DEFAULT_MAX_WAIT,
) -> VideoResultResponse:
    """Submit a video generation task and wait for the video.

    Args:
        client: Configured client
        request: Video request
        timeout: Deadline of the submission call
        interval: Seconds between result queries
        max_wait: Polling budget in seconds

    Returns:
        The SUCCESS result with its video URLs

    Raises:
        TaskFailedError: If generation failed
        TaskTimeoutError: If the video was not ready within max_wait
    """
    submission = await submit_video_generation(client, request, timeout=timeout)
    return await wait_for_task(
        client,
        submission.task_id,
        get_video_result,
        interval=interval,
        max_wait=max_wait,
    )
