#!/usr/bin/env python3
"""
Tool calling (function calling) example.

This example demonstrates how to define tools, run the calls the model
asks for and send the results back.

Usage:
    export BIGMODEL_API_KEY="your-api-key"
    python examples/tool_calling.py
"""

import asyncio
import json
from typing import Any

from bigmodel_python import ChatMessage, ChatRequestBuilder, ClientSettings
from bigmodel_python.types import Tool, ToolChoice

MODEL = "glm-4-plus"
SYSTEM = "You are a helpful assistant with access to weather data."
QUESTION = "北京和上海今天天气怎么样？"


# Simulated tool implementation
def get_weather(city: str, unit: str = "celsius") -> dict[str, Any]:
    """Simulate getting weather data."""
    weather_data = {
        "北京": {"temp": 12, "condition": "晴"},
        "上海": {"temp": 18, "condition": "多云"},
    }
    data = dict(weather_data.get(city, {"temp": 20, "condition": "未知"}))
    if unit == "fahrenheit":
        data["temp"] = data["temp"] * 9 / 5 + 32
    data["unit"] = unit
    data["city"] = city
    return data


weather_tool = Tool.function_tool(
    name="get_weather",
    description="Get the current weather for a city",
    parameters={
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "City name, e.g. 北京"},
            "unit": {"type": "string", "enum": ["celsius", "fahrenheit"]},
        },
        "required": ["city"],
    },
)


async def main() -> None:
    """Run tool calling example."""
    async with ClientSettings.load().create_client() as client:
        print(f"User: {QUESTION}\n")

        response = await (
            ChatRequestBuilder(client, MODEL)
            .system(SYSTEM)
            .user(QUESTION)
            .tools([weather_tool])
            .tool_choice(ToolChoice.AUTO)
            .execute()
        )

        reply = response.choices[0].message
        if not reply.tool_calls:
            print(f"Assistant: {response.content}")
            return

        messages = [
            ChatMessage.system(SYSTEM),
            ChatMessage.user(QUESTION),
            reply.to_chat_message(),
        ]
        print(f"Model wants to call {len(reply.tool_calls)} tool(s):")
        for call in reply.tool_calls:
            if call.function is None:
                continue
            arguments = call.function.parse_arguments()
            result = get_weather(**arguments)
            print(f"  - {call.function.name}({arguments}) -> {result}")
            messages.append(ChatMessage.tool(call.id, json.dumps(result, ensure_ascii=False)))

        final = await (
            ChatRequestBuilder(client, MODEL).messages(messages).tools([weather_tool]).execute()
        )
        print(f"\nAssistant: {final.content}")


if __name__ == "__main__":
    asyncio.run(main())
