"""
Homey MCP server.

Exposes the tool registry to any MCP-compatible client (Claude Desktop,
Cursor, custom agents, etc.) over stdio. stdout carries the protocol, so
all diagnostics go to stderr through logging.

Tools:
    homey_list_devices            all devices with current capability values
    homey_get_sensor_readings     measure_* readings of sensor-like devices
    homey_get_device              one device by id
    homey_find_devices_by_zone    devices in a zone (by name or id)
    homey_control_lights_in_zone  switch all lights in a zone on/off
    homey_set_capability          write one capability on one device
    homey_list_flows              standard flows
    homey_list_advanced_flows     advanced flows
    homey_run_flow                trigger a standard flow
    homey_run_advanced_flow       trigger an advanced flow
    homey_list_zones              zones with parent references
    homey_get_energy_data         available power/energy insight logs
"""

import logging
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .exceptions import ToolCallError
from .tools import ToolRegistry

logger = logging.getLogger("homey_mcp.server")

SERVER_NAME = "homey-mcp"
SERVER_VERSION = __version__


def create_server(registry: ToolRegistry) -> Server:
    """Build the MCP server around a registry."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return registry.list_mcp_tools()

    # Arguments are validated by the registry so every failure uses the same
    # "Error: <message>" envelope.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        result = (await registry.execute(name, arguments)).to_mcp()
        if result.isError:
            # The low-level server turns a raised error into an isError
            # result whose only text block is str(exc).
            raise ToolCallError(result.content[0].text)
        return result.content

    return server


async def serve_stdio(registry: ToolRegistry) -> None:
    """Serve the registry over stdin/stdout until the client disconnects."""
    server = create_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Homey MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
