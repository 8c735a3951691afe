#!/usr/bin/env python3
"""
Basic chat completion example.

This example demonstrates the simplest way to use bigmodel-python
for chat completions.

Usage:
    export BIGMODEL_API_KEY="your-api-key"
    python examples/basic_chat.py
"""

import asyncio

from bigmodel_python import (
    ChatCompletionRequest,
    ChatMessage,
    ChatRequestBuilder,
    ClientBuilder,
    create_chat_completion,
)


async def main() -> None:
    """Run basic chat example."""
    # Reads BIGMODEL_API_KEY when no key is given
    client = ClientBuilder().timeout_string("60s").build()

    async with client:
        # Method 1: Fluent API with chained methods
        response = await (
            ChatRequestBuilder(client, "glm-4-flash")
            .system("You are a helpful assistant.")
            .user("What is the capital of France?")
            .temperature(0.7)
            .execute()
        )
        print(f"Response: {response.content}")
        print(f"Finish reason: {response.finish_reason}")
        print()

        # Method 2: Request model
        request = ChatCompletionRequest(
            model="glm-4-flash",
            messages=[
                ChatMessage.system("You are a Python expert."),
                ChatMessage.user("Write a one-liner to read a file."),
            ],
            max_tokens=100,
        )
        response = await create_chat_completion(client, request)
        print(f"Python tip: {response.content}")
        print(
            f"Tokens: {response.usage.prompt_tokens} in, "
            f"{response.usage.completion_tokens} out"
        )


if __name__ == "__main__":
    asyncio.run(main())
