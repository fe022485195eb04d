"""
Inventory API configuration.

Settings for the external stock service consumed through the Stock Gateway.
An empty base_url disables the gateway; reads then degrade to "no data".

Dependencies: pydantic_settings
System role: External inventory service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InventoryApiSettings(BaseSettings):
    """Settings for the external inventory HTTP API."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="",
        description="Inventory API base URL (empty disables the gateway)",
    )
    api_key: str = Field(
        default="",
        description="Value sent in the X-API-Key header",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout in seconds",
    )
    retry_count: int = Field(
        default=3,
        description="Connection retries before a call degrades",
    )

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)
