"""
Shared test fixtures and configuration for entire test suite.

Provides: Two in-memory record stores (one engine each), per-store sessions,
a fixed clock, services and resolver wired to the test stores.
Dependencies: pytest, pytest_asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bookgraph.application.services import AuthorService, BookService, BulkService
from bookgraph.boundary.db.base import AuthorStoreBase, BookStoreBase
from bookgraph.core.relationship_resolver import RelationshipResolver

FIXED_NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


async def _store_session(metadata):
    # Each store gets its own in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    return engine, session_factory


@pytest_asyncio.fixture
async def author_db():
    """
    Author store session on its own in-memory SQLite database.

    Yields:
        AsyncSession: Author store session
    """
    engine, session_factory = await _store_session(AuthorStoreBase.metadata)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def book_db():
    """
    Book store session on its own in-memory SQLite database.

    Yields:
        AsyncSession: Book store session
    """
    engine, session_factory = await _store_session(BookStoreBase.metadata)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def author_service(author_db, book_db, clock) -> AuthorService:
    return AuthorService(author_db=author_db, book_db=book_db, clock=clock)


@pytest.fixture
def book_service(author_db, book_db) -> BookService:
    return BookService(author_db=author_db, book_db=book_db)


@pytest.fixture
def resolver(author_db, book_db, clock) -> RelationshipResolver:
    return RelationshipResolver(author_db=author_db, book_db=book_db, clock=clock)


@pytest.fixture
def bulk_service(author_service, book_service, resolver) -> BulkService:
    return BulkService(
        author_service=author_service,
        book_service=book_service,
        resolver=resolver,
    )


@pytest_asyncio.fixture
async def writer(author_service):
    """A persisted author: A. Writer <a@x.com>, born 1970-01-01."""
    return await author_service.create_author(
        name="A. Writer",
        email="a@x.com",
        date_of_birth=date(1970, 1, 1),
    )


@pytest_asyncio.fixture
async def make_book(book_service):
    """Factory creating persisted books with sensible defaults."""

    async def _make_book(author_id: int, title: str = "T", price: str = "10.00", **kwargs):
        return await book_service.create_book(
            title=title,
            author_id=author_id,
            price=Decimal(price),
            **kwargs,
        )

    return _make_book
