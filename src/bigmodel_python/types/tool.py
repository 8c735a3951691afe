"""
Tool types for function calling support.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolChoice(str, Enum):
    """Tool choice policy for requests; the API currently accepts only auto."""

    AUTO = "auto"


class FunctionDefinition(BaseModel):
    """Function definition within a tool.

    Defines the schema for a callable function including:
    - name: Function identifier (a-z, A-Z, 0-9, underscores and dashes, max 64)
    - description: What the function does, used by the model to pick it
    - parameters: JSON Schema for function parameters; omit when none
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Function name")
    description: str = Field(default="", description="Function description")
    parameters: dict[str, Any] | None = Field(
        default=None, description="JSON Schema for parameters"
    )


class Tool(BaseModel):
    """Tool the model may call.

    Example:
        >>> tool = Tool.function_tool(
        ...     name="get_weather",
        ...     description="Get weather for a city",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"city": {"type": "string"}},
        ...         "required": ["city"],
        ...     },
        ... )
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="function", description="Tool type")
    function: FunctionDefinition | None = Field(default=None, description="Function definition")

    @classmethod
    def function_tool(
        cls,
        name: str,
        description: str = "",
        parameters: dict[str, Any] | None = None,
    ) -> Tool:
        """Create a function tool."""
        return cls(
            type="function",
            function=FunctionDefinition(
                name=name, description=description, parameters=parameters
            ),
        )


class ToolCallFunction(BaseModel):
    """Function name and JSON arguments generated by the model."""

    name: str = ""
    arguments: str = Field(default="", description="JSON encoded arguments")

    def parse_arguments(self) -> dict[str, Any]:
        """Decode the arguments; validate them before calling the function.

        Raises:
            ValueError: If the arguments are not a JSON object
        """
        if not self.arguments:
            return {}
        data = json.loads(self.arguments)
        if not isinstance(data, dict):
            raise ValueError(f"tool arguments are not a JSON object: {self.arguments}")
        return data


class McpInputSchema(BaseModel):
    """Input schema of an MCP tool."""

    model_config = ConfigDict(populate_by_name=True)

    type: str | None = None
    properties: dict[str, Any] | None = None
    required: list[str] | None = None
    additional_properties: bool | None = Field(default=None, alias="additionalProperties")


class McpTool(BaseModel):
    """A tool listed by an MCP server."""

    name: str | None = None
    description: str | None = None
    annotations: Any | None = None
    input_schema: McpInputSchema | None = None


class McpCall(BaseModel):
    """An MCP tool invocation made by the model."""

    id: str = ""
    type: str = Field(default="", description="mcp_list_tools or mcp_call")
    name: str | None = None
    server_label: str | None = None
    arguments: str | None = None
    output: str | None = None
    error: str | None = None
    tools: list[McpTool] | None = None


class ToolCall(BaseModel):
    """A tool call generated by the model.

    The same shape is sent back in assistant messages of later turns.
    """

    model_config = ConfigDict(extra="allow")

    id: str = ""
    type: str = Field(default="function", description="function, web_search, retrieval or mcp")
    function: ToolCallFunction | None = None
    mcp: McpCall | None = None
