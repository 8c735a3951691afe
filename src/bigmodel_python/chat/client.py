"""对话补全：同步、流式与异步提交三种调用方式。

Chat completion calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bigmodel_python.client.core import require_request
from bigmodel_python.client.options import ASYNC_CHAT_COMPLETIONS_PATH, CHAT_COMPLETIONS_PATH
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.chat import ChatCompletionChunk, ChatCompletionResponse
from bigmodel_python.types.common import AsyncTaskResponse

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.streaming import Stream
    from bigmodel_python.types.chat import ChatCompletionRequest

logger = get_logger(__name__)


async def create_chat_completion(
    client: Client,
    request: ChatCompletionRequest,
    *,
    timeout: float | None = None,
) -> ChatCompletionResponse:
    """Send a chat completion request and wait for the full reply.

    Args:
        client: Configured client
        request: Chat request; ``stream`` is sent as given
        timeout: Per-call deadline overriding the client's

    Returns:
        Validated chat completion

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the body is not a usable chat completion
    """
    require_request(request, "chat completion")
    response = await client.send(
        "POST",
        client.resolve_path(CHAT_COMPLETIONS_PATH),
        ChatCompletionResponse,
        body=request,
        timeout=timeout,
    )
    logger.debug(
        "Chat completion received",
        model=response.model,
        finish_reason=response.finish_reason,
        usage=response.usage.total_tokens,
    )
    return response


async def stream_chat_completion(
    client: Client,
    request: ChatCompletionRequest,
    *,
    timeout: float | None = None,
) -> Stream[ChatCompletionChunk]:
    """Send a chat completion request and stream the reply.

    ``stream`` is forced on; the caller's request is left unchanged.

    Example:
        >>> async with await stream_chat_completion(client, request) as stream:
        ...     async for chunk in stream:
        ...         print(chunk.delta_text, end="")

    Returns:
        Open stream of chunks; close it when done

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
    """
    require_request(request, "chat completion stream")
    body = request.model_copy(update={"stream": True})
    return await client.open_stream(
        "POST",
        client.resolve_path(CHAT_COMPLETIONS_PATH),
        ChatCompletionChunk,
        body=body,
        timeout=timeout,
    )


async def submit_chat_completion(
    client: Client,
    request: ChatCompletionRequest,
    *,
    timeout: float | None = None,
) -> AsyncTaskResponse:
    """Submit a chat completion to the async endpoint.

    Poll the returned task with get_chat_result() or wait_for_task().

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the acknowledgement lacks an ID or task status
    """
    require_request(request, "async chat completion")
    submission = await client.send(
        "POST",
        client.resolve_path(ASYNC_CHAT_COMPLETIONS_PATH),
        AsyncTaskResponse,
        body=request,
        timeout=timeout,
    )
    logger.info("Chat task submitted", task_id=submission.task_id, model=submission.model)
    return submission
