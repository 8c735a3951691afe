#!/usr/bin/env python3
"""
Streaming response example.

This example demonstrates how to stream responses token by token
for real-time output.

Usage:
    export BIGMODEL_API_KEY="your-api-key"
    python examples/streaming.py
"""

import asyncio

from bigmodel_python import (
    ChatCompletionRequest,
    ChatMessage,
    ClientSettings,
    StreamError,
    configure_logging,
    stream_chat_completion,
)


async def main() -> None:
    """Run streaming example."""
    configure_logging("INFO")
    client = ClientSettings.load().create_client()

    request = ChatCompletionRequest(
        model="glm-4-flash",
        messages=[
            ChatMessage.system("You are a creative storyteller."),
            ChatMessage.user("Tell me a very short story about a robot learning to paint."),
        ],
        max_tokens=500,
    )

    async with client:
        print("Streaming response:\n")
        print("-" * 50)

        try:
            async with await stream_chat_completion(client, request) as stream:
                async for chunk in stream:
                    print(chunk.delta_text, end="", flush=True)
                    if chunk.usage.total_tokens:
                        print(f"\n\n[Tokens: {chunk.usage.total_tokens}]")
        except StreamError as e:
            print(f"\n\n[Error: {e}]")

        print("-" * 50)


if __name__ == "__main__":
    asyncio.run(main())
