"""
Zone tools.

Zones are resolved by id when one is given, otherwise by case-insensitive
exact match on the zone name. An unresolved zone is an error, which keeps
"no such zone" apart from "zone exists but is empty".
"""

import asyncio
import logging
from typing import Any, Optional

from ..exceptions import ToolInputError, ZoneNotFoundError
from ..homey.models import Zone
from ..homey.protocols import HomeySession
from .base import ToolParameter, ToolResult

logger = logging.getLogger("homey_mcp.tools.zones")

ONOFF = "onoff"


def find_zone_by_name(zones: dict[str, Zone], zone_name: str) -> Optional[Zone]:
    wanted = zone_name.lower()
    for zone in zones.values():
        if zone.name.lower() == wanted:
            return zone
    return None


async def fetch_devices_and_zones(homey: HomeySession):
    """Fetch both collections concurrently; both calls finish before any error is raised."""
    devices, zones = await asyncio.gather(
        homey.devices.get_devices(),
        homey.zones.get_zones(),
        return_exceptions=True,
    )
    for outcome in (devices, zones):
        if isinstance(outcome, BaseException):
            raise outcome
    return devices, zones


class ListZonesTool:
    """Flat zone list with parent references."""

    name = "homey_list_zones"
    description = "List all zones (rooms/floors) and their hierarchy."
    parameters: list[ToolParameter] = []

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        zones = await homey.zones.get_zones()
        lines = []
        for zone in zones.values():
            parent = f" (Parent: {zone.parent})" if zone.parent else ""
            lines.append(f"📍 {zone.name} [ID: {zone.id}]{parent}")
        return ToolResult.ok("Zones:\n" + "\n".join(lines))


class FindDevicesByZoneTool:
    """Devices whose zone id matches the requested zone, in backend order."""

    name = "homey_find_devices_by_zone"
    description = "List all devices in a specific zone (room or floor)."
    parameters = [
        ToolParameter(
            name="zoneName",
            param_type="string",
            description="The name of the zone (e.g. 'Living Room')",
        ),
        ToolParameter(
            name="zoneId",
            param_type="string",
            description="The ID of the zone (optional)",
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        zone_name = params.get("zoneName")
        zone_id = params.get("zoneId")
        if not zone_name and not zone_id:
            raise ToolInputError("Provide zoneName or zoneId")

        devices, zones = await fetch_devices_and_zones(homey)

        if not zone_id:
            zone = find_zone_by_name(zones, zone_name)
            if zone is None:
                raise ZoneNotFoundError(zone_name)
            zone_id = zone.id

        lines = [
            f"- {d.name} ({d.device_class}) [ID: {d.id}]"
            for d in devices.values()
            if d.zone == zone_id
        ]
        output = "\n".join(lines) or "No devices in this zone."
        return ToolResult.ok(f"Devices in {zone_name or zone_id}:\n{output}")


class ControlLightsInZoneTool:
    """
    Switch every light in a zone on or off, best effort.

    Lights are devices in the zone with class "light" or an onoff
    capability. They are switched one at a time; a device that fails is
    logged and skipped, and only successes are counted.
    """

    name = "homey_control_lights_in_zone"
    description = "Turn all lights in a specific zone on or off."
    parameters = [
        ToolParameter(
            name="zoneName",
            param_type="string",
            description="The name of the zone",
            required=True,
        ),
        ToolParameter(
            name="on",
            param_type="boolean",
            description="True to turn on, False to turn off",
            required=True,
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        zone_name = params["zoneName"]
        turn_on = params["on"]

        devices, zones = await fetch_devices_and_zones(homey)

        zone = find_zone_by_name(zones, zone_name)
        if zone is None:
            raise ZoneNotFoundError(zone_name)

        lights = [
            d for d in devices.values()
            if d.zone == zone.id and (d.device_class == "light" or ONOFF in d.capabilities)
        ]

        success_count = 0
        for light in lights:
            try:
                device = await homey.devices.get_device(light.id)
                await device.set_capability_value(ONOFF, turn_on)
                success_count += 1
            except Exception as e:
                logger.warning("Failed to control light %s: %s", light.name, e)

        logger.info(
            "Turned %s %d/%d lights in %s",
            "on" if turn_on else "off", success_count, len(lights), zone.name,
        )
        return ToolResult.ok(
            f"💡 Successfully turned {'on' if turn_on else 'off'} {success_count} lights in {zone.name}."
        )


list_zones_tool = ListZonesTool()
find_devices_by_zone_tool = FindDevicesByZoneTool()
control_lights_in_zone_tool = ControlLightsInZoneTool()
