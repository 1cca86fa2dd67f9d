"""
Homey local Web API client.

Talks to the controller over HTTP with a personal access token and exposes
the managers the tools use (devices, zones, flow, advflow, insights).
Retry and reconnection are deliberately absent; a failed call raises.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..exceptions import HomeyAPIError, HomeyConnectionError, HomeyNotFoundError
from .models import AdvancedFlow, Device, Flow, InsightLog, Zone

logger = logging.getLogger("homey_mcp.homey.client")


def _error_message(resp: httpx.Response) -> str:
    """Extract the controller's error text from a failed response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error_description", "error", "message"):
            if body.get(key):
                return str(body[key])
    text = resp.text.strip()
    return text or f"HTTP {resp.status_code}"


def _segment(value: str) -> str:
    """Escape an id for use as a single URL path segment."""
    escaped = quote(str(value), safe="")
    if escaped in ("", ".", ".."):
        raise HomeyNotFoundError(f"Invalid id: {value!r}")
    return escaped


class _Manager:
    def __init__(self, api: "HomeyAPI") -> None:
        self._api = api


class DevicesManager(_Manager):
    """/api/manager/devices"""

    async def get_devices(self) -> dict[str, Device]:
        data = await self._api.request("GET", "/api/manager/devices/device/")
        return {
            device_id: Device.from_api(item, manager=self)
            for device_id, item in (data or {}).items()
        }

    async def get_device(self, device_id: str) -> Device:
        data = await self._api.request("GET", f"/api/manager/devices/device/{_segment(device_id)}")
        return Device.from_api(data, manager=self)

    async def set_capability_value(self, device_id: str, capability_id: str, value: Any) -> None:
        await self._api.request(
            "PUT",
            f"/api/manager/devices/device/{_segment(device_id)}/capability/{_segment(capability_id)}",
            json={"value": value},
        )
        logger.info("Set %s=%r on device %s", capability_id, value, device_id)


class ZonesManager(_Manager):
    """/api/manager/zones"""

    async def get_zones(self) -> dict[str, Zone]:
        data = await self._api.request("GET", "/api/manager/zones/zone/")
        return {zone_id: Zone.from_api(item) for zone_id, item in (data or {}).items()}


class AdvancedFlowsManager(_Manager):
    """Advanced flows under /api/manager/flow/advancedflow."""

    async def get_advanced_flows(self) -> dict[str, AdvancedFlow]:
        data = await self._api.request("GET", "/api/manager/flow/advancedflow/")
        return {
            flow_id: AdvancedFlow.from_api(item, manager=self)
            for flow_id, item in (data or {}).items()
        }

    async def get_advanced_flow(self, flow_id: str) -> AdvancedFlow:
        data = await self._api.request("GET", f"/api/manager/flow/advancedflow/{_segment(flow_id)}")
        return AdvancedFlow.from_api(data, manager=self)

    async def trigger_advanced_flow(self, flow_id: str) -> None:
        await self._api.request("POST", f"/api/manager/flow/advancedflow/{_segment(flow_id)}/trigger")
        logger.info("Triggered advanced flow %s", flow_id)


class FlowManager(AdvancedFlowsManager):
    """/api/manager/flow"""

    async def get_flows(self) -> dict[str, Flow]:
        data = await self._api.request("GET", "/api/manager/flow/flow/")
        return {flow_id: Flow.from_api(item) for flow_id, item in (data or {}).items()}

    async def run_flow(self, flow_id: str) -> None:
        await self._api.request("POST", f"/api/manager/flow/flow/{_segment(flow_id)}/trigger")
        logger.info("Triggered flow %s", flow_id)


class InsightsManager(_Manager):
    """/api/manager/insights"""

    async def get_logs(self) -> list[InsightLog]:
        data = await self._api.request("GET", "/api/manager/insights/log/")
        items = data.values() if isinstance(data, dict) else (data or [])
        return [InsightLog.from_api(item) for item in items]


class HomeyAPI:
    """Homey local Web API session."""

    def __init__(
        self,
        address: Optional[str],
        token: str,
        timeout: float = 30.0,
    ):
        self.address = address.rstrip("/") if address else None
        self.token = token
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

        self.devices = DevicesManager(self)
        self.zones = ZonesManager(self)
        self.flow = FlowManager(self)
        self.advflow: Optional[AdvancedFlowsManager] = AdvancedFlowsManager(self)
        self.insights = InsightsManager(self)

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Open the HTTP session and verify the token against the controller."""
        if not self.address:
            raise HomeyConnectionError(
                "Cloud connection requires OAuth2 or specific Homey ID. "
                "Please use HOMEY_IP for Local API."
            )

        self._client = httpx.AsyncClient(
            base_url=self.address,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
        )

        try:
            await self.request("GET", "/api/manager/system/", require_connection=False)
        except Exception:
            await self._client.aclose()
            self._client = None
            raise

        self._connected = True
        logger.info("Connected to Homey at %s", self.address)

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False
            logger.info("Disconnected from Homey")

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        require_connection: bool = True,
    ) -> Any:
        """
        Perform one API call and decode the JSON body.

        Raises:
            HomeyConnectionError: controller unreachable or session closed
            HomeyNotFoundError: 404 from the controller
            HomeyAPIError: any other error status
        """
        if self._client is None or (require_connection and not self._connected):
            raise HomeyConnectionError("Homey client not connected")

        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise HomeyConnectionError(f"Timed out talking to Homey at {self.address}") from e
        except httpx.HTTPError as e:
            raise HomeyConnectionError(f"Could not reach Homey at {self.address}: {e}") from e

        if resp.status_code == 404:
            raise HomeyNotFoundError(_error_message(resp))
        if resp.status_code >= 400:
            raise HomeyAPIError(resp.status_code, _error_message(resp))

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        if not resp.content:
            return None
        return resp.json()
