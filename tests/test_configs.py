"""
Test suite for application settings.

Tests per-store environment prefixes, URL construction and the inventory
gateway switch.

System role: Verification of configuration loading
"""

import pytest
from pydantic import ValidationError

from bookgraph.configs import Settings
from bookgraph.configs.database import AuthorStoreSettings, BookStoreSettings
from bookgraph.configs.inventory import InventoryApiSettings


class TestStoreSettings:
    """Test suite for the two store configurations."""

    def test_stores_should_read_their_own_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("AUTHOR_DB_HOST", "authors.internal")
        monkeypatch.setenv("BOOK_DB_HOST", "books.internal")

        assert AuthorStoreSettings().host == "authors.internal"
        assert BookStoreSettings().host == "books.internal"

    def test_default_urls_should_target_separate_databases(self) -> None:
        author_url = AuthorStoreSettings(host="h", port=1, user="u", password="p").async_database_url
        book_url = BookStoreSettings(host="h", port=1, user="u", password="p").async_database_url

        assert author_url == "postgresql+asyncpg://u:p@h:1/authors"
        assert book_url == "postgresql+asyncpg://u:p@h:1/books"

    def test_url_override_should_win(self) -> None:
        store = BookStoreSettings(url="sqlite+aiosqlite:///books.db")

        assert store.async_database_url == "sqlite+aiosqlite:///books.db"
        assert store.is_sqlite is True


class TestSettings:
    """Test suite for the aggregated settings."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.currency_symbol == "$"
        assert settings.inventory_api.timeout_seconds == 30.0
        assert settings.inventory_api.retry_count == 3

    def test_inventory_should_be_disabled_without_base_url(self) -> None:
        assert InventoryApiSettings(base_url="").enabled is False
        assert InventoryApiSettings(base_url="http://inv").enabled is True

    def test_log_level_should_be_normalized(self) -> None:
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_should_fail(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")
