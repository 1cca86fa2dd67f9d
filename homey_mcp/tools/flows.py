"""
Flow tools.

Standard flows and advanced flows are separate collections on Homey.
Advanced flows are served by the `advflow` manager when the session has
one, and by the flow manager otherwise.
"""

import logging
from typing import Any

from ..homey.protocols import HomeySession, advanced_flow_manager
from .base import ToolParameter, ToolResult

logger = logging.getLogger("homey_mcp.tools.flows")


class ListFlowsTool:
    name = "homey_list_flows"
    description = "List all standard flows on Homey."
    parameters: list[ToolParameter] = []

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        flows = await homey.flow.get_flows()
        output = "\n".join(
            f"- {f.name} [ID: {f.id}] ({'Enabled' if f.enabled else 'Disabled'})"
            for f in flows.values()
        )
        return ToolResult.ok(f"Standard Flows:\n{output}")


class ListAdvancedFlowsTool:
    name = "homey_list_advanced_flows"
    description = "List all Advanced Flows on Homey."
    parameters: list[ToolParameter] = []

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        flows = await advanced_flow_manager(homey).get_advanced_flows()
        output = "\n".join(f"- {f.name} [ID: {f.id}]" for f in flows.values())
        return ToolResult.ok(f"Advanced Flows:\n{output}")


class RunFlowTool:
    """Trigger a standard flow. At most once per call; never retried."""

    name = "homey_run_flow"
    description = "Trigger a specific standard flow."
    parameters = [
        ToolParameter(
            name="id",
            param_type="string",
            description="The ID of the flow",
            required=True,
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        flow_id = params["id"]
        await homey.flow.run_flow(flow_id)
        return ToolResult.ok(f"🚀 Successfully triggered standard flow: {flow_id}")


class RunAdvancedFlowTool:
    name = "homey_run_advanced_flow"
    description = "Trigger a specific Advanced Flow."
    parameters = [
        ToolParameter(
            name="id",
            param_type="string",
            description="The ID of the flow",
            required=True,
        ),
    ]

    async def execute(self, homey: HomeySession, params: dict[str, Any]) -> ToolResult:
        flow_id = params["id"]
        flow = await advanced_flow_manager(homey).get_advanced_flow(flow_id)
        await flow.trigger()
        return ToolResult.ok(f"🚀 Successfully triggered Advanced Flow: {flow_id}")


list_flows_tool = ListFlowsTool()
list_advanced_flows_tool = ListAdvancedFlowsTool()
run_flow_tool = RunFlowTool()
run_advanced_flow_tool = RunAdvancedFlowTool()
