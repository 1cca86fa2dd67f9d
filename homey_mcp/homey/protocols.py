"""
Protocol definitions for the Homey session seen by tools.

Tools only depend on these shapes, so any object exposing the same
managers (the HTTP client, or a fake in tests) can be injected.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import AdvancedFlow, Device, Flow, InsightLog, Zone


class DeviceManager(Protocol):
    async def get_devices(self) -> dict[str, Device]:
        ...

    async def get_device(self, device_id: str) -> Device:
        ...


class ZoneManager(Protocol):
    async def get_zones(self) -> dict[str, Zone]:
        ...


class AdvancedFlowManager(Protocol):
    async def get_advanced_flows(self) -> dict[str, AdvancedFlow]:
        ...

    async def get_advanced_flow(self, flow_id: str) -> AdvancedFlow:
        ...


class FlowManager(AdvancedFlowManager, Protocol):
    """
    Standard flows. Older controllers also serve advanced flows from here,
    which is why it doubles as an AdvancedFlowManager.
    """

    async def get_flows(self) -> dict[str, Flow]:
        ...

    async def run_flow(self, flow_id: str) -> None:
        ...


class InsightsManager(Protocol):
    async def get_logs(self) -> list[InsightLog]:
        ...


@runtime_checkable
class HomeySession(Protocol):
    """
    A live handle to the controller.

    Tools borrow the session; connecting and closing it is the owner's job.
    `advflow` may be None when the controller only exposes advanced flows
    through the flow manager.
    """

    devices: DeviceManager
    zones: ZoneManager
    flow: FlowManager
    advflow: Optional[AdvancedFlowManager]
    insights: InsightsManager


def advanced_flow_manager(homey: Any) -> AdvancedFlowManager:
    """Pick the manager that serves advanced flows for this session."""
    manager = getattr(homey, "advflow", None)
    if manager is not None:
        return manager
    return homey.flow
