"""
Point-in-time snapshots of Homey objects.

Snapshots are built fresh from every API response and are never cached or
mutated in place. Changing a device or firing a flow goes back through the
manager that produced the snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def _capability_values(raw: Any) -> dict[str, Any]:
    """Reduce capabilitiesObj to capability id -> current value."""
    if not isinstance(raw, dict):
        return {}
    values = {}
    for cap_id, cap in raw.items():
        if isinstance(cap, dict):
            values[cap_id] = cap.get("value")
        else:
            values[cap_id] = cap
    return values


@dataclass
class Device:
    """A Homey device and its current capability values."""

    id: str
    name: str
    zone: Optional[str] = None
    zone_name: Optional[str] = None
    device_class: Optional[str] = None
    capabilities: list[str] = field(default_factory=list)
    capabilities_obj: dict[str, Any] = field(default_factory=dict)
    _manager: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any], manager: Any = None) -> "Device":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            zone=data.get("zone"),
            zone_name=data.get("zoneName"),
            device_class=data.get("class"),
            capabilities=list(data.get("capabilities") or []),
            capabilities_obj=_capability_values(data.get("capabilitiesObj")),
            _manager=manager,
        )

    async def set_capability_value(self, capability_id: str, value: Any) -> None:
        """Write a capability value through the owning manager."""
        if self._manager is None:
            raise RuntimeError(f"Device {self.id} is not bound to a Homey session")
        await self._manager.set_capability_value(self.id, capability_id, value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "zone": self.zone,
            "zoneName": self.zone_name,
            "class": self.device_class,
            "capabilities": self.capabilities,
            "capabilitiesObj": self.capabilities_obj,
        }


@dataclass
class Zone:
    """A room or floor. Hierarchy is expressed by the parent id only."""

    id: str
    name: str
    parent: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Zone":
        return cls(id=data["id"], name=data.get("name", ""), parent=data.get("parent"))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent": self.parent}


@dataclass
class Flow:
    """A standard flow."""

    id: str
    name: str
    enabled: bool = True

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Flow":
        return cls(id=data["id"], name=data.get("name", ""), enabled=bool(data.get("enabled", True)))


@dataclass
class AdvancedFlow:
    """An advanced flow. Triggered through the manager that fetched it."""

    id: str
    name: str
    enabled: bool = True
    _manager: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any], manager: Any = None) -> "AdvancedFlow":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            enabled=bool(data.get("enabled", True)),
            _manager=manager,
        )

    async def trigger(self) -> None:
        if self._manager is None:
            raise RuntimeError(f"Advanced flow {self.id} is not bound to a Homey session")
        await self._manager.trigger_advanced_flow(self.id)


@dataclass
class InsightLog:
    """An insights log descriptor (identifier only, no time series)."""

    id: str
    name: str
    owner_uri: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "InsightLog":
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            owner_uri=data.get("ownerUri"),
        )
