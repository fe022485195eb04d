"""
API test fixtures.

Provides a TestClient over a fresh app with every service and the
resolver replaced through dependency_overrides.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from bookgraph.api.deps.dependencies import (
    get_author_service,
    get_book_service,
    get_bulk_service,
    get_relationship_resolver,
)
from bookgraph.api.main import create_app
from factories import mock_resolver


@pytest.fixture
def mock_author_service():
    return AsyncMock()


@pytest.fixture
def mock_book_service():
    return AsyncMock()


@pytest.fixture
def mock_bulk_service():
    return AsyncMock()


@pytest.fixture
def resolver_double():
    return mock_resolver()


@pytest.fixture
def client(mock_author_service, mock_book_service, mock_bulk_service, resolver_double):
    app = create_app()
    app.dependency_overrides[get_author_service] = lambda: mock_author_service
    app.dependency_overrides[get_book_service] = lambda: mock_book_service
    app.dependency_overrides[get_bulk_service] = lambda: mock_bulk_service
    app.dependency_overrides[get_relationship_resolver] = lambda: resolver_double
    return TestClient(app, raise_server_exceptions=False)
