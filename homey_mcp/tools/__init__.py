"""
Homey Tools - the catalog exposed to MCP clients.

Every tool is registered here, in catalog order. The registry is built once
at startup and never changes afterwards.
"""

from typing import Optional

from ..homey.protocols import HomeySession

from .base import Tool, ToolParameter, ToolResult
from .registry import NOT_CONNECTED_MESSAGE, ToolRegistry
from .devices import (
    GetDeviceTool,
    get_device_tool,
    GetSensorReadingsTool,
    get_sensor_readings_tool,
    ListDevicesTool,
    list_devices_tool,
    SetCapabilityTool,
    set_capability_tool,
)
from .zones import (
    ControlLightsInZoneTool,
    control_lights_in_zone_tool,
    FindDevicesByZoneTool,
    find_devices_by_zone_tool,
    ListZonesTool,
    list_zones_tool,
)
from .flows import (
    ListAdvancedFlowsTool,
    list_advanced_flows_tool,
    ListFlowsTool,
    list_flows_tool,
    RunAdvancedFlowTool,
    run_advanced_flow_tool,
    RunFlowTool,
    run_flow_tool,
)
from .insights import GetEnergyDataTool, get_energy_data_tool

CATALOG: tuple[Tool, ...] = (
    list_devices_tool,
    get_sensor_readings_tool,
    get_device_tool,
    find_devices_by_zone_tool,
    control_lights_in_zone_tool,
    set_capability_tool,
    list_flows_tool,
    list_advanced_flows_tool,
    run_flow_tool,
    run_advanced_flow_tool,
    list_zones_tool,
    get_energy_data_tool,
)


def build_registry(homey: Optional[HomeySession] = None) -> ToolRegistry:
    """Build the tool registry bound to a Homey session (None when offline)."""
    registry = ToolRegistry(homey=homey)
    for tool in CATALOG:
        registry.register(tool)
    return registry


__all__ = [
    "Tool",
    "ToolParameter",
    "ToolResult",
    "ToolRegistry",
    "NOT_CONNECTED_MESSAGE",
    "CATALOG",
    "build_registry",
    "ListDevicesTool",
    "list_devices_tool",
    "GetSensorReadingsTool",
    "get_sensor_readings_tool",
    "GetDeviceTool",
    "get_device_tool",
    "SetCapabilityTool",
    "set_capability_tool",
    "ListZonesTool",
    "list_zones_tool",
    "FindDevicesByZoneTool",
    "find_devices_by_zone_tool",
    "ControlLightsInZoneTool",
    "control_lights_in_zone_tool",
    "ListFlowsTool",
    "list_flows_tool",
    "ListAdvancedFlowsTool",
    "list_advanced_flows_tool",
    "RunFlowTool",
    "run_flow_tool",
    "RunAdvancedFlowTool",
    "run_advanced_flow_tool",
    "GetEnergyDataTool",
    "get_energy_data_tool",
]
