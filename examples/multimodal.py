#!/usr/bin/env python3
"""
Multimodal (images) example.

This example demonstrates how to send images to a vision model.

Usage:
    export BIGMODEL_API_KEY="your-api-key"
    python examples/multimodal.py [path/to/image.png]
"""

import asyncio
import sys

from bigmodel_python import ChatMessage, ChatRequestBuilder, Client, ClientSettings
from bigmodel_python.types import ImageUrlPart, image_url, text

MODEL = "glm-4v-plus"

ANT = "https://upload.wikimedia.org/wikipedia/commons/thumb/a/a7/Camponotus_flavomarginatus_ant.jpg/320px-Camponotus_flavomarginatus_ant.jpg"
BEE = "https://upload.wikimedia.org/wikipedia/commons/thumb/b/b0/Honeybee_landing_on_milkthistle02.jpg/320px-Honeybee_landing_on_milkthistle02.jpg"


async def compare_images(client: Client) -> None:
    """Compare two images by URL."""
    message = ChatMessage.user(
        [
            text("Compare these two images and describe the differences:"),
            image_url(ANT),
            image_url(BEE),
        ]
    )
    response = await ChatRequestBuilder(client, MODEL).messages([message]).max_tokens(300).execute()
    print(f"Comparison: {response.content}")


async def analyze_image_from_file(client: Client, image_path: str) -> None:
    """Analyze a local image, sent as a base64 data URI."""
    message = ChatMessage.user(
        [text("Analyze this image in detail:"), ImageUrlPart.from_file(image_path)]
    )
    response = await ChatRequestBuilder(client, MODEL).messages([message]).max_tokens(500).execute()
    print(f"Analysis: {response.content}")


async def main() -> None:
    """Run multimodal examples."""
    async with ClientSettings.load().create_client() as client:
        await compare_images(client)

        if len(sys.argv) > 1:
            print("\n" + "=" * 50 + "\n")
            await analyze_image_from_file(client, sys.argv[1])


if __name__ == "__main__":
    asyncio.run(main())
