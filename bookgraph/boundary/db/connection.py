"""
Record store connection management.

Provides one async SQLAlchemy engine and session factory per record store,
plus FastAPI dependencies that hand each request its own session per store.
The two stores never share an engine, a session or a transaction.

Dependencies: sqlalchemy, bookgraph.configs
System role: Store connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bookgraph.configs import get_settings
from bookgraph.configs.database import StoreSettings


def _create_engine(store: StoreSettings) -> AsyncEngine:
    """
    Create an async engine for one store.

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early. SQLite URLs skip pool sizing.
    """
    if store.is_sqlite:
        return create_async_engine(store.async_database_url, echo=store.echo_sql)

    return create_async_engine(
        store.async_database_url,
        echo=store.echo_sql,
        pool_size=store.pool_size,
        max_overflow=store.max_overflow,
        pool_timeout=store.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_author_engine() -> AsyncEngine:
    """
    Get the author store engine (created once per process).

    Returns:
        AsyncEngine: Engine bound to the author database
    """
    return _create_engine(get_settings().author_store)


@lru_cache
def get_book_engine() -> AsyncEngine:
    """
    Get the book store engine (created once per process).

    Returns:
        AsyncEngine: Engine bound to the book database
    """
    return _create_engine(get_settings().book_store)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for a store engine.

    autoflush=False and expire_on_commit=False keep loaded records usable
    after each single-record commit made by the command services.

    Args:
        engine: Engine for one store

    Returns:
        async_sessionmaker: Session factory configured for manual transaction control
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_author_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding an author store session for one request.

    Yields:
        AsyncSession: Session scoped to the request lifetime

    Usage:
        @app.get("/authors/{id}")
        async def get_author(id: int, author_db: AsyncSession = Depends(get_author_db)):
            return await author_crud.get_by_id(author_db, id)
    """
    SessionFactory = make_session_factory(get_author_engine())
    async with SessionFactory() as session:
        yield session


async def get_book_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a book store session for one request.

    Yields:
        AsyncSession: Session scoped to the request lifetime
    """
    SessionFactory = make_session_factory(get_book_engine())
    async with SessionFactory() as session:
        yield session


async def dispose_engines() -> None:
    """Dispose both store engines and forget them."""
    for factory in (get_author_engine, get_book_engine):
        if factory.cache_info().currsize:
            await factory().dispose()
        factory.cache_clear()
