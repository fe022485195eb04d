"""
Record store configuration settings.

Authors and books live in two independently owned databases, so each
store gets its own connection settings and environment prefix.

Dependencies: pydantic, pydantic_settings
System role: Store connection configuration for the ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from bookgraph.configs.base import BaseSettings


class StoreSettings(BaseSettings):
    """Connection parameters shared by both record stores."""

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="bookgraph", description="PostgreSQL database name")
    url: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL, overrides host/port/user/password/db",
    )

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> str:
        """
        Construct async connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )

    @property
    def is_sqlite(self) -> bool:
        """True when the store is backed by SQLite (no pool sizing)."""
        return self.async_database_url.startswith("sqlite")


class AuthorStoreSettings(StoreSettings):
    """Author store (store A) configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTHOR_DB_",
        case_sensitive=False,
        extra="ignore",
    )

    db: str = Field(default="authors", description="Author database name")


class BookStoreSettings(StoreSettings):
    """Book store (store B) configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BOOK_DB_",
        case_sensitive=False,
        extra="ignore",
    )

    db: str = Field(default="books", description="Book database name")
