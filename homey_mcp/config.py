"""
Configuration management using Pydantic Settings.

Configuration is loaded from environment variables (and an optional .env
file) with the HOMEY_ prefix.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HomeySettings(BaseSettings):
    """Homey controller and bridge configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEY_",
        env_file=".env",
        extra="ignore",
    )

    token: Optional[str] = Field(default=None, description="Personal access token for the Homey Web API")
    ip: Optional[str] = Field(default=None, description="Local address of the Homey (IP, host or URL)")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds for controller calls")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("token", "ip", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip().strip("\"'")
            return v or None
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def address(self) -> Optional[str]:
        """Base URL of the local API, with a scheme."""
        if not self.ip:
            return None
        if self.ip.startswith("http"):
            return self.ip.rstrip("/")
        return f"http://{self.ip}".rstrip("/")
