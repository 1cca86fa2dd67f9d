"""
Device tools: listing, inspection, sensor readings and capability writes.
"""

import json
import logging
from typing import Any

from ..homey.protocols import HomeySession
from .base import ToolParameter, ToolResult

logger = logging.getLogger("homey_mcp.tools.devices")

MEASURE_PREFIX = "measure_"


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ListDevicesTool:
    """All devices with their current capability values."""

    name = "homey_list_devices"
    description = "List all devices on Homey with their current states."
    parameters: list[ToolParameter] = []

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        devices = await homey.devices.get_devices()
        blocks = []
        for device in devices.values():
            zone = device.zone_name or "Unknown Zone"
            blocks.append(
                f"🏠 [{zone}] {device.name} ({device.device_class})\n"
                f"   ID: {device.id}\n"
                f"   Capabilities: {', '.join(device.capabilities)}\n"
                f"   State: {json.dumps(device.capabilities_obj, default=str)}"
            )
        output = "\n\n".join(blocks)
        return ToolResult.ok(f"Total Devices: {len(devices)}\n\n{output}")


class GetSensorReadingsTool:
    """
    Current measure_* values across the home.

    A device qualifies when its class is "sensor" or it has any measure_
    capability. Qualifying devices without readings are still listed.
    """

    name = "homey_get_sensor_readings"
    description = (
        "Get current readings from all sensors (temperature, humidity, motion, etc.) "
        "across the home."
    )
    parameters: list[ToolParameter] = []

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        devices = await homey.devices.get_devices()
        sensors = [
            d for d in devices.values()
            if d.device_class == "sensor"
            or any(cap.startswith(MEASURE_PREFIX) for cap in d.capabilities)
        ]

        lines = []
        for sensor in sensors:
            readings = ", ".join(
                f"{cap}: {_format_value(value)}"
                for cap, value in sensor.capabilities_obj.items()
                if cap.startswith(MEASURE_PREFIX)
            )
            lines.append(f"🌡️ {sensor.name} ({sensor.zone_name}): {readings or 'No active measures'}")

        return ToolResult.ok("\n".join(lines) or "No sensors found.")


class GetDeviceTool:
    """Full snapshot of one device. Not-found comes from the controller."""

    name = "homey_get_device"
    description = "Get detailed information about a specific device by ID."
    parameters = [
        ToolParameter(
            name="id",
            param_type="string",
            description="The ID of the device",
            required=True,
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        device = await homey.devices.get_device(params["id"])
        return ToolResult.ok(json.dumps(device.to_dict(), indent=2, default=str))


class SetCapabilityTool:
    """Write one capability value on one device."""

    name = "homey_set_capability"
    description = "Set a capability value on a device (e.g. turn on/off, dim, target_temperature)."
    parameters = [
        ToolParameter(
            name="deviceId",
            param_type="string",
            description="The ID of the device",
            required=True,
        ),
        ToolParameter(
            name="capabilityId",
            param_type="string",
            description="The ID of the capability (e.g. onoff, dim, target_temperature, light_hue)",
            required=True,
        ),
        ToolParameter(
            name="value",
            param_type=["boolean", "number", "string"],
            description="The value to set",
            required=True,
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        capability_id = params["capabilityId"]
        value = params["value"]

        device = await homey.devices.get_device(params["deviceId"])
        await device.set_capability_value(capability_id, value)

        return ToolResult.ok(
            f"✅ Successfully set {capability_id} to {_format_value(value)} on {device.name}"
        )


list_devices_tool = ListDevicesTool()
get_sensor_readings_tool = GetSensorReadingsTool()
get_device_tool = GetDeviceTool()
set_capability_tool = SetCapabilityTool()
