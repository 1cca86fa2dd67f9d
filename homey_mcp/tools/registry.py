"""
Tool registry and dispatcher.

The registry is the catalog (ordered, built once at startup) and the single
point where tool calls are routed, validated and turned into results.
"""

import logging
from typing import Any, Optional

from mcp import types

from ..exceptions import ToolInputError
from ..homey.protocols import HomeySession
from .base import Tool, ToolParameter, ToolResult

logger = logging.getLogger("homey_mcp.tools.registry")

NOT_CONNECTED_MESSAGE = "Homey is not connected. Check your HOMEY_TOKEN and/or HOMEY_IP."

_JSON_TYPES = {
    "int": "integer",
}


def _json_type(param: ToolParameter) -> str | list[str]:
    kinds = [_JSON_TYPES.get(kind, kind) for kind in param.kinds]
    return kinds[0] if len(kinds) == 1 else kinds


def _matches(value: Any, kind: str) -> bool:
    # bool is a subclass of int, so it has to be ruled out for numbers
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind in ("int", "integer"):
        return isinstance(value, int) and not isinstance(value, bool)
    if kind == "string":
        return isinstance(value, str)
    return True


def validate_params(tool: Tool, params: dict[str, Any]) -> None:
    """Check arguments against the tool's declared parameters."""
    for param in tool.parameters:
        value = params.get(param.name)
        if value is None:
            if param.required:
                raise ToolInputError(f"Missing required argument '{param.name}' for {tool.name}")
            continue
        if not any(_matches(value, kind) for kind in param.kinds):
            expected = " or ".join(param.kinds)
            raise ToolInputError(
                f"Argument '{param.name}' for {tool.name} must be {expected}, "
                f"got {type(value).__name__}"
            )


class ToolRegistry:
    """Catalog of tools plus the dispatcher that runs them."""

    def __init__(self, homey: Optional[HomeySession] = None) -> None:
        self._tools: dict[str, Tool] = {}
        self._homey = homey

    @property
    def homey(self) -> Optional[HomeySession]:
        return self._homey

    def register(self, tool: Tool) -> None:
        """Register a tool. Names are unique within the catalog."""
        if tool.name in self._tools:
            raise ValueError(f"Tool {tool.name} already registered")
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by exact name."""
        return self._tools.get(name)

    def list_all(self) -> list[Tool]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        return list(self._tools.keys())

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Generate MCP tool descriptors (name, description, inputSchema)."""
        schemas = []
        for tool in self._tools.values():
            properties = {}
            required = []
            for param in tool.parameters:
                properties[param.name] = {
                    "type": _json_type(param),
                    "description": param.description,
                }
                if param.required:
                    required.append(param.name)
            input_schema: dict[str, Any] = {
                "type": "object",
                "properties": properties,
            }
            if required:
                input_schema["required"] = required
            schemas.append({
                "name": tool.name,
                "description": tool.description,
                "inputSchema": input_schema,
            })
        return schemas

    def list_mcp_tools(self) -> list[types.Tool]:
        return [types.Tool(**schema) for schema in self.get_tool_schemas()]

    async def execute(self, name: str, params: Optional[dict[str, Any]]) -> ToolResult:
        """
        Run a tool by name and always return a ToolResult.

        Order of checks: connection, tool lookup, argument validation. Any
        exception raised by the tool is converted into a failure carrying
        the exception message; nothing is retried.
        """
        if self._homey is None:
            return ToolResult.failure(NOT_CONNECTED_MESSAGE)

        tool = self.get(name)
        if not tool:
            return ToolResult.failure(f"Unknown operation: {name}")

        params = params or {}
        try:
            validate_params(tool, params)
            return await tool.execute(self._homey, params)
        except ToolInputError as e:
            logger.info("Rejected call to %s: %s", name, e)
            return ToolResult.failure(str(e))
        except Exception as e:
            logger.exception("Error executing tool %s", name)
            return ToolResult.failure(str(e) or type(e).__name__)
