"""
Homey controller access.

The HTTP client and snapshot models used by the tools.
"""

from .client import HomeyAPI
from .models import AdvancedFlow, Device, Flow, InsightLog, Zone
from .protocols import HomeySession, advanced_flow_manager

__all__ = [
    "HomeyAPI",
    "HomeySession",
    "advanced_flow_manager",
    "AdvancedFlow",
    "Device",
    "Flow",
    "InsightLog",
    "Zone",
]
