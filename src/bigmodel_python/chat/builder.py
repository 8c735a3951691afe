"""
Fluent builder for chat completion requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bigmodel_python.chat.client import (
    create_chat_completion,
    stream_chat_completion,
    submit_chat_completion,
)
from bigmodel_python.types.chat import ChatCompletionRequest, ResponseFormat, Thinking
from bigmodel_python.types.message import ChatMessage

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.streaming import Stream
    from bigmodel_python.types.chat import ChatCompletionChunk, ChatCompletionResponse
    from bigmodel_python.types.common import AsyncTaskResponse
    from bigmodel_python.types.message import MessageContent
    from bigmodel_python.types.tool import Tool, ToolChoice


class ChatRequestBuilder:
    """Builder for chat completion requests.

    Example:
        >>> response = await (
        ...     ChatRequestBuilder(client, "glm-4-flash")
        ...     .system("You are a helpful assistant.")
        ...     .user("Hello!")
        ...     .temperature(0.7)
        ...     .execute()
        ... )

        >>> async with await ChatRequestBuilder(client, "glm-4-flash").user("Hi").stream() as s:
        ...     async for chunk in s:
        ...         print(chunk.delta_text, end="")
    """

    def __init__(self, client: Client, model: str) -> None:
        """Initialize the builder.

        Args:
            client: Client used by execute(), stream() and submit()
            model: Model code
        """
        self._client = client
        self._model = model
        self._messages: list[ChatMessage] = []
        self._params: dict[str, Any] = {}

    def messages(self, messages: list[ChatMessage]) -> ChatRequestBuilder:
        """Replace the conversation.

        Returns:
            Self for chaining
        """
        self._messages = list(messages)
        return self

    def add_message(self, message: ChatMessage) -> ChatRequestBuilder:
        """Append a message.

        Returns:
            Self for chaining
        """
        self._messages.append(message)
        return self

    def system(self, content: str) -> ChatRequestBuilder:
        """Append a system message.

        Returns:
            Self for chaining
        """
        self._messages.append(ChatMessage.system(content))
        return self

    def user(self, content: MessageContent) -> ChatRequestBuilder:
        """Append a user message; content may be text or a list of parts.

        Returns:
            Self for chaining
        """
        self._messages.append(ChatMessage.user(content))
        return self

    def assistant(self, content: str) -> ChatRequestBuilder:
        """Append an assistant message.

        Returns:
            Self for chaining
        """
        self._messages.append(ChatMessage.assistant(content))
        return self

    def temperature(self, value: float) -> ChatRequestBuilder:
        """Set the sampling temperature (0.0 to 1.0).

        Returns:
            Self for chaining
        """
        self._params["temperature"] = value
        return self

    def top_p(self, value: float) -> ChatRequestBuilder:
        """Set nucleus sampling (0.0 to 1.0).

        Returns:
            Self for chaining
        """
        self._params["top_p"] = value
        return self

    def max_tokens(self, value: int) -> ChatRequestBuilder:
        """Set the maximum number of output tokens.

        Returns:
            Self for chaining
        """
        self._params["max_tokens"] = value
        return self

    def do_sample(self, enabled: bool) -> ChatRequestBuilder:
        """Enable or disable sampling; disabled means greedy decoding.

        Returns:
            Self for chaining
        """
        self._params["do_sample"] = enabled
        return self

    def thinking(self, enabled: bool = True) -> ChatRequestBuilder:
        """Switch chain-of-thought on or off.

        Returns:
            Self for chaining
        """
        self._params["thinking"] = Thinking(type="enabled" if enabled else "disabled")
        return self

    def stop(self, sequences: list[str]) -> ChatRequestBuilder:
        """Set stop sequences.

        Returns:
            Self for chaining
        """
        self._params["stop"] = sequences
        return self

    def tools(self, tools: list[Tool]) -> ChatRequestBuilder:
        """Set tools for function calling.

        Returns:
            Self for chaining
        """
        self._params["tools"] = tools
        return self

    def tool_choice(self, choice: ToolChoice | str) -> ChatRequestBuilder:
        """Set the tool choice policy.

        Returns:
            Self for chaining
        """
        self._params["tool_choice"] = getattr(choice, "value", choice)
        return self

    def json_output(self) -> ChatRequestBuilder:
        """Ask for a JSON object reply.

        Returns:
            Self for chaining
        """
        self._params["response_format"] = ResponseFormat(type="json_object")
        return self

    def request_id(self, value: str) -> ChatRequestBuilder:
        """Set the client-side request ID.

        Returns:
            Self for chaining
        """
        self._params["request_id"] = value
        return self

    def user_id(self, value: str) -> ChatRequestBuilder:
        """Set the end-user ID.

        Returns:
            Self for chaining
        """
        self._params["user_id"] = value
        return self

    def build(self) -> ChatCompletionRequest:
        """Build the request.

        Raises:
            pydantic.ValidationError: If a parameter is out of range
        """
        return ChatCompletionRequest(model=self._model, messages=self._messages, **self._params)

    async def execute(self, *, timeout: float | None = None) -> ChatCompletionResponse:
        """Send the request and wait for the full reply."""
        return await create_chat_completion(self._client, self.build(), timeout=timeout)

    async def stream(self, *, timeout: float | None = None) -> Stream[ChatCompletionChunk]:
        """Send the request and stream the reply."""
        return await stream_chat_completion(self._client, self.build(), timeout=timeout)

    async def submit(self, *, timeout: float | None = None) -> AsyncTaskResponse:
        """Submit the request to the async endpoint."""
        return await submit_chat_completion(self._client, self.build(), timeout=timeout)
