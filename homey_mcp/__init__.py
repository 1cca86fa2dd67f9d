"""
Homey MCP bridge.

Exposes a Homey controller's devices, zones, flows and insight logs as MCP
tools.

Run:
    python -m homey_mcp          # stdio (Claude Desktop / Cursor)
"""

__version__ = "1.0.0"
