"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from bookgraph.configs.base import BaseSettings
from bookgraph.configs.database import AuthorStoreSettings, BookStoreSettings
from bookgraph.configs.inventory import InventoryApiSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    author_store: AuthorStoreSettings = Field(default_factory=AuthorStoreSettings)
    book_store: BookStoreSettings = Field(default_factory=BookStoreSettings)
    inventory_api: InventoryApiSettings = Field(default_factory=InventoryApiSettings)

    currency_symbol: str = Field(
        default="$",
        description="Prefix used for formatted book prices",
    )
    create_tables_on_startup: bool = Field(
        default=False,
        description="Create missing store tables when the API starts",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from bookgraph.configs import get_settings
        settings = get_settings()
    """
    return Settings()
