"""
Custom exceptions for the Homey bridge.

Backend errors carry the controller's own message text so it can be
surfaced to the MCP client unmodified.
"""


class HomeyError(Exception):
    """Base exception for all Homey bridge errors."""

    pass


class HomeyConnectionError(HomeyError):
    """Raised when the Homey controller cannot be reached."""

    pass


class HomeyAPIError(HomeyError):
    """Raised when the Homey Web API answers with an error status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


class HomeyNotFoundError(HomeyAPIError):
    """Raised when a device, zone, flow or log does not exist."""

    def __init__(self, message: str):
        super().__init__(404, message)


class ToolInputError(HomeyError):
    """Raised when tool arguments do not match the declared parameters."""

    pass


class ZoneNotFoundError(HomeyError):
    """Raised when a zone name does not match any zone on the controller."""

    def __init__(self, zone):
        self.zone = zone
        super().__init__(f"Zone not found: {zone}")


class ToolCallError(HomeyError):
    """Carries a failed tool result out of the MCP call handler."""

    pass
