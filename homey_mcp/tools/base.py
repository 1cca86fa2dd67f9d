"""
Base types and protocols for Homey tools.

A tool bundles its catalog entry (name, description, parameters) with the
handler that runs it, so the advertised schema and the code cannot drift.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

from mcp import types

if TYPE_CHECKING:
    from ..homey.protocols import HomeySession


@dataclass
class ToolResult:
    """Result from executing a tool."""

    success: bool
    content: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def ok(cls, *texts: str) -> "ToolResult":
        return cls(success=True, content=list(texts))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(success=False, error=message)

    def to_mcp(self) -> types.CallToolResult:
        """Convert to the MCP result envelope."""
        if not self.success:
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=f"Error: {self.error}")],
                isError=True,
            )
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=text) for text in self.content],
            isError=False,
        )


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    param_type: Union[str, list[str]]
    description: str
    required: bool = False

    @property
    def kinds(self) -> list[str]:
        if isinstance(self.param_type, str):
            return [self.param_type]
        return list(self.param_type)


@runtime_checkable
class Tool(Protocol):
    """Protocol for all Homey tools."""

    @property
    def name(self) -> str:
        """Unique tool identifier (e.g., 'homey_list_devices')."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description for the LLM."""
        ...

    @property
    def parameters(self) -> list[ToolParameter]:
        """List of parameters this tool accepts."""
        ...

    async def execute(self, homey: "HomeySession", params: dict[str, Any]) -> ToolResult:
        """
        Execute the tool against a connected Homey session.

        Backend errors are not caught here; the registry turns them into
        failure results.
        """
        ...
