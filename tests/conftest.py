"""
Shared fixtures: a mocked Homey session and snapshot builders.

The session mirrors the managers the tools use (devices, zones, flow,
advflow, insights) with AsyncMock methods so call counts can be asserted.
"""

from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from homey_mcp.homey.models import Device, Zone


def make_device(
    device_id: str,
    name: str,
    zone: str = "zone-living",
    zone_name: Optional[str] = "Living Room",
    device_class: str = "light",
    values: Optional[dict[str, Any]] = None,
    capabilities: Optional[list[str]] = None,
    manager: Any = None,
) -> Device:
    values = values if values is not None else {}
    return Device(
        id=device_id,
        name=name,
        zone=zone,
        zone_name=zone_name,
        device_class=device_class,
        capabilities=capabilities if capabilities is not None else list(values),
        capabilities_obj=dict(values),
        _manager=manager,
    )


def make_zone(zone_id: str, name: str, parent: Optional[str] = None) -> Zone:
    return Zone(id=zone_id, name=name, parent=parent)


def by_id(items) -> dict:
    return {item.id: item for item in items}


@pytest.fixture
def homey():
    session = MagicMock()
    session.devices.get_devices = AsyncMock(return_value={})
    session.devices.get_device = AsyncMock()
    session.devices.set_capability_value = AsyncMock()
    session.zones.get_zones = AsyncMock(return_value={})
    session.flow.get_flows = AsyncMock(return_value={})
    session.flow.run_flow = AsyncMock()
    session.flow.get_advanced_flows = AsyncMock(return_value={})
    session.flow.get_advanced_flow = AsyncMock()
    session.advflow = None
    session.insights.get_logs = AsyncMock(return_value=[])
    return session


@pytest.fixture
def zones():
    return by_id([
        make_zone("zone-home", "Home"),
        make_zone("zone-living", "Living Room", parent="zone-home"),
        make_zone("zone-kitchen", "Kitchen", parent="zone-home"),
    ])


