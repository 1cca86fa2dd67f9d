"""
Energy insight tool.

Only lists which power logs exist. Historical values need a follow-up
request with a specific log id, which this bridge does not make.
"""

import logging
from typing import Any

from ..homey.protocols import HomeySession
from .base import ToolParameter, ToolResult

logger = logging.getLogger("homey_mcp.tools.insights")

POWER_MARKERS = ("meter_power", "measure_power")
DEVICE_URI_PREFIX = "homey:device:"


def is_power_log(log) -> bool:
    return any(marker in log.id or marker in log.name for marker in POWER_MARKERS)


def is_owned_by(log, device_id: str) -> bool:
    """Exact owner match; log ids look like homey:device:<id>:<capability>."""
    if log.owner_uri:
        return log.owner_uri == f"{DEVICE_URI_PREFIX}{device_id}"
    parts = log.id.split(":")
    return len(parts) >= 3 and parts[:2] == ["homey", "device"] and parts[2] == device_id


class GetEnergyDataTool:
    name = "homey_get_energy_data"
    description = "Get energy consumption logs for devices."
    parameters = [
        ToolParameter(
            name="deviceId",
            param_type="string",
            description="Optional: ID of a specific device",
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        device_id = params.get("deviceId")

        logs = await homey.insights.get_logs()
        energy_logs = [log for log in logs if is_power_log(log)]
        if device_id:
            energy_logs = [log for log in energy_logs if is_owned_by(log, device_id)]

        output = "\n".join(f"- {log.name} ({log.id})" for log in energy_logs)
        return ToolResult.ok(
            f"Available Energy Logs:\n{output or 'No energy logs found.'}\n\n"
            "Note: Visualizing historical data requires specific log IDs."
        )


get_energy_data_tool = GetEnergyDataTool()
