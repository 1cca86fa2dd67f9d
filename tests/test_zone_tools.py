"""
Tests for zone listing, zone lookup and bulk light control.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from homey_mcp.exceptions import HomeyAPIError
from homey_mcp.tools import build_registry

from conftest import by_id, make_device, make_zone


class TestListZones:
    async def test_flat_list_with_parents(self, homey, zones):
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute("homey_list_zones", {})

        assert result.content[0] == (
            "Zones:\n"
            "📍 Home [ID: zone-home]\n"
            "📍 Living Room [ID: zone-living] (Parent: zone-home)\n"
            "📍 Kitchen [ID: zone-kitchen] (Parent: zone-home)"
        )


class TestFindDevicesByZone:
    def _devices(self):
        return by_id([
            make_device("d3", "Fridge Plug", zone="zone-kitchen", device_class="socket"),
            make_device("d1", "Sofa Lamp", zone="zone-living"),
            make_device("d2", "Counter Light", zone="zone-kitchen"),
        ])

    async def test_kitchen_lists_only_its_devices_in_backend_order(self, homey, zones):
        homey.devices.get_devices.return_value = self._devices()
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": "Kitchen"})

        assert result.success is True
        assert result.content[0] == (
            "Devices in Kitchen:\n"
            "- Fridge Plug (socket) [ID: d3]\n"
            "- Counter Light (light) [ID: d2]"
        )

    async def test_missing_zone_is_an_error_naming_it(self, homey):
        homey.devices.get_devices.return_value = self._devices()
        homey.zones.get_zones.return_value = by_id([make_zone("zone-living", "Living Room")])

        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": "Kitchen"})

        assert result.success is False
        assert "Kitchen" in result.error
        assert result.to_mcp().content[0].text == "Error: Zone not found: Kitchen"

    @pytest.mark.parametrize("name", ["living room", "LIVING ROOM", "Living Room"])
    async def test_name_match_is_case_insensitive(self, homey, zones, name):
        homey.devices.get_devices.return_value = self._devices()
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": name})

        assert result.content[0] == f"Devices in {name}:\n- Sofa Lamp (light) [ID: d1]"

    async def test_partial_name_does_not_match(self, homey, zones):
        homey.zones.get_zones.return_value = zones
        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": "Living"})
        assert result.success is False

    async def test_zone_id_used_directly(self, homey, zones):
        homey.devices.get_devices.return_value = self._devices()
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute(
            "homey_find_devices_by_zone", {"zoneId": "zone-living", "zoneName": "Kitchen"}
        )

        assert "Sofa Lamp" in result.content[0]
        assert "Fridge Plug" not in result.content[0]

    async def test_existing_empty_zone_is_not_an_error(self, homey, zones):
        homey.zones.get_zones.return_value = zones
        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": "Home"})
        assert result.success is True
        assert result.content[0] == "Devices in Home:\nNo devices in this zone."

    async def test_requires_name_or_id(self, homey):
        result = await build_registry(homey).execute("homey_find_devices_by_zone", {})
        assert result.success is False
        assert "zoneName or zoneId" in result.error
        homey.devices.get_devices.assert_not_awaited()


class TestControlLightsInZone:
    def _setup(self, homey, zones, devices, failing=()):
        manager = MagicMock()

        async def set_value(device_id, capability_id, value):
            if device_id in failing:
                raise HomeyAPIError(500, f"{device_id} unreachable")

        manager.set_capability_value = AsyncMock(side_effect=set_value)
        bound = {d.id: make_device(d.id, d.name, zone=d.zone, device_class=d.device_class,
                                   capabilities=d.capabilities, manager=manager)
                 for d in devices}
        homey.devices.get_devices.return_value = by_id(devices)
        homey.devices.get_device.side_effect = lambda device_id: bound[device_id]
        homey.zones.get_zones.return_value = zones
        return manager

    async def test_one_failure_does_not_stop_the_batch(self, homey, zones):
        devices = [
            make_device("l1", "Lamp 1", zone="zone-living", values={"onoff": False}),
            make_device("l2", "Lamp 2", zone="zone-living", values={"onoff": False}),
            make_device("l3", "Lamp 3", zone="zone-living", values={"onoff": False}),
        ]
        manager = self._setup(homey, zones, devices, failing={"l2"})

        result = await build_registry(homey).execute(
            "homey_control_lights_in_zone", {"zoneName": "living room", "on": True}
        )

        assert result.success is True
        assert result.content[0] == "💡 Successfully turned on 2 lights in Living Room."
        called = [c.args for c in manager.set_capability_value.await_args_list]
        assert called == [("l1", "onoff", True), ("l2", "onoff", True), ("l3", "onoff", True)]

    async def test_selects_lights_and_onoff_devices_in_zone_only(self, homey, zones):
        devices = [
            make_device("l1", "Pendant", zone="zone-kitchen", capabilities=["dim"]),
            make_device("p1", "Kettle", zone="zone-kitchen", device_class="socket", values={"onoff": True}),
            make_device("s1", "Thermo", zone="zone-kitchen", device_class="sensor",
                        values={"measure_temperature": 20}),
            make_device("l2", "Sofa Lamp", zone="zone-living", values={"onoff": True}),
        ]
        manager = self._setup(homey, zones, devices)

        result = await build_registry(homey).execute(
            "homey_control_lights_in_zone", {"zoneName": "Kitchen", "on": False}
        )

        assert result.content[0] == "💡 Successfully turned off 2 lights in Kitchen."
        touched = [c.args[0] for c in manager.set_capability_value.await_args_list]
        assert touched == ["l1", "p1"]

    async def test_all_failing_still_succeeds_with_zero(self, homey, zones):
        devices = [make_device("l1", "Lamp", zone="zone-living", values={"onoff": True})]
        homey.devices.get_devices.return_value = by_id(devices)
        homey.devices.get_device.side_effect = HomeyAPIError(503, "busy")
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute(
            "homey_control_lights_in_zone", {"zoneName": "Living Room", "on": True}
        )

        assert result.success is True
        assert result.content[0] == "💡 Successfully turned on 0 lights in Living Room."

    async def test_unknown_zone_fails(self, homey, zones):
        homey.zones.get_zones.return_value = zones

        result = await build_registry(homey).execute(
            "homey_control_lights_in_zone", {"zoneName": "Garage", "on": True}
        )

        assert result.success is False
        assert result.error == "Zone not found: Garage"
        homey.devices.get_device.assert_not_awaited()


class TestConcurrentFetch:
    @pytest.mark.parametrize("tool,args", [
        ("homey_find_devices_by_zone", {"zoneName": "Kitchen"}),
        ("homey_control_lights_in_zone", {"zoneName": "Kitchen", "on": True}),
    ])
    async def test_devices_error_reported_after_both_fetches_finish(self, homey, tool, args):
        homey.devices.get_devices.side_effect = HomeyAPIError(500, "devices unavailable")
        homey.zones.get_zones.side_effect = HomeyAPIError(500, "zones unavailable")

        result = await build_registry(homey).execute(tool, args)

        assert result.success is False
        assert result.error == "devices unavailable"
        homey.zones.get_zones.assert_awaited_once()

    async def test_zones_error_surfaces_when_devices_succeed(self, homey):
        homey.devices.get_devices.return_value = {}
        homey.zones.get_zones.side_effect = HomeyAPIError(503, "zones unavailable")

        result = await build_registry(homey).execute("homey_find_devices_by_zone", {"zoneName": "Kitchen"})

        assert result.success is False
        assert result.error == "zones unavailable"
