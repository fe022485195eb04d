"""
Store table creation.

Creates each store's tables on its own engine. The author metadata is
never created on the book engine and vice versa.

Dependencies: sqlalchemy, bookgraph.boundary.db
System role: Store schema initialization

Usage:
    python -m bookgraph.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from bookgraph.boundary.db.base import AuthorStoreBase, BookStoreBase
from bookgraph.boundary.db.connection import (
    dispose_engines,
    get_author_engine,
    get_book_engine,
)
from bookgraph.observability.logger import configure_logging

# Import all models to register them with their store metadata
from bookgraph.boundary.db.models import AuthorModel, BookModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_store_tables(
    author_engine: AsyncEngine | None = None,
    book_engine: AsyncEngine | None = None,
) -> None:
    """
    Create all tables in both stores.

    Idempotent: existing tables remain unchanged.

    Args:
        author_engine: Engine for the author store (defaults to configured one)
        book_engine: Engine for the book store (defaults to configured one)
    """
    author_engine = author_engine or get_author_engine()
    book_engine = book_engine or get_book_engine()

    async with author_engine.begin() as conn:
        await conn.run_sync(AuthorStoreBase.metadata.create_all)
    logger.info("Author store tables created")

    async with book_engine.begin() as conn:
        await conn.run_sync(BookStoreBase.metadata.create_all)
    logger.info("Book store tables created")


async def drop_store_tables(
    author_engine: AsyncEngine | None = None,
    book_engine: AsyncEngine | None = None,
) -> None:
    """
    Drop all tables in both stores.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    author_engine = author_engine or get_author_engine()
    book_engine = book_engine or get_book_engine()

    async with author_engine.begin() as conn:
        await conn.run_sync(AuthorStoreBase.metadata.drop_all)
    async with book_engine.begin() as conn:
        await conn.run_sync(BookStoreBase.metadata.drop_all)
    logger.info("All store tables dropped")


async def _main() -> None:
    configure_logging()
    await create_store_tables()
    await dispose_engines()


if __name__ == "__main__":
    asyncio.run(_main())
