"""
Book service orchestrator.

Validated create, update and delete of Books. A Book may only be created
with, or re-pointed to, an author_id that resolves in the author store at
the time of the write. Writes commit on the book store session.

Dependencies: sqlalchemy, bookgraph.boundary, bookgraph.core
System role: Book use case orchestration
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.CRUD.book_crud import book_crud
from bookgraph.boundary.db.models import BookModel
from bookgraph.boundary.inventory.stock_gateway import StockGateway
from bookgraph.core.exceptions import NotFound, ValidationError
from bookgraph.core.integrity_guard import IntegrityGuard
from bookgraph.core.money import to_money
from bookgraph.core.validators import validate_book_fields

logger = logging.getLogger(__name__)


class BookService:
    """Book service orchestrator."""

    def __init__(
        self,
        author_db: AsyncSession,
        book_db: AsyncSession,
        stock_gateway: StockGateway | None = None,
    ) -> None:
        """
        Initialize book service with one session per store.

        Args:
            author_db: Author store session (read for reference checks)
            book_db: Book store session (written)
            stock_gateway: Inventory gateway used by update_stock
        """
        self.author_db = author_db
        self.book_db = book_db
        self.guard = IntegrityGuard(author_db, book_db)
        self.stock_gateway = stock_gateway

    async def create_book(
        self,
        title: str,
        author_id: int,
        price: Decimal,
        description: str = "",
        published_date: datetime | None = None,
        is_available: bool = True,
    ) -> BookModel:
        """
        Create a new book.

        Args:
            title: Book title (1-500 characters)
            author_id: Existing author identifier
            price: Non-negative price
            description: Optional description (up to 2000 characters)
            published_date: Publication time, defaults to now
            is_available: Availability flag, defaults to True

        Returns:
            BookModel: Created book with store-assigned id

        Raises:
            ValidationError: If a field breaks a rule
            ReferenceNotFound: If author_id does not resolve
        """
        validate_book_fields(title=title, description=description, price=price)
        await self.guard.assert_author_exists(author_id)

        fields = {
            "title": title.strip(),
            "description": description.strip(),
            "price": to_money(price),
            "author_id": author_id,
            "is_available": is_available,
        }
        if published_date is not None:
            fields["published_date"] = published_date

        try:
            book = await book_crud.create(self.book_db, **fields)
            await self.book_db.commit()
        except SQLAlchemyError as e:
            await self.book_db.rollback()
            logger.error(
                "Failed to create book",
                extra={"error": str(e), "author_id": author_id},
            )
            raise

        logger.info("Book created", extra={"book_id": book.id, "author_id": author_id})
        return book

    async def update_book(
        self,
        book_id: int,
        title: str | None = None,
        description: str | None = None,
        price: Decimal | None = None,
        is_available: bool | None = None,
        author_id: int | None = None,
    ) -> BookModel:
        """
        Apply a partial update; None means "leave unchanged".

        Args:
            book_id: Book to update
            title: New title
            description: New description
            price: New price
            is_available: New availability flag
            author_id: New author reference, checked like on create

        Returns:
            BookModel: The updated book (unchanged if no field supplied)

        Raises:
            NotFound: If the book does not exist
            ValidationError: If a supplied field breaks a rule
            ReferenceNotFound: If a new author_id does not resolve
        """
        validate_book_fields(title=title, description=description, price=price)
        book = await self.get_book(book_id)

        changes: dict = {}
        if title is not None:
            changes["title"] = title.strip()
        if description is not None:
            changes["description"] = description.strip()
        if price is not None:
            changes["price"] = to_money(price)
        if is_available is not None:
            changes["is_available"] = is_available
        if author_id is not None:
            if author_id != book.author_id:
                await self.guard.assert_author_exists(author_id)
            changes["author_id"] = author_id

        if not changes:
            return book

        try:
            book = await book_crud.update_by_id(self.book_db, book_id, **changes)
            await self.book_db.commit()
        except SQLAlchemyError as e:
            await self.book_db.rollback()
            logger.error(
                "Failed to update book",
                extra={"error": str(e), "book_id": book_id},
            )
            raise

        if book is None:
            raise NotFound("Book", book_id)

        logger.info("Book updated", extra={"book_id": book_id, "fields": sorted(changes)})
        return book

    async def delete_book(self, book_id: int) -> bool:
        """
        Delete a book.

        Returns:
            bool: True if deleted, False if the book did not exist
        """
        try:
            deleted = await book_crud.delete_by_id(self.book_db, book_id)
            await self.book_db.commit()
        except SQLAlchemyError as e:
            await self.book_db.rollback()
            logger.error("Failed to delete book", extra={"error": str(e), "book_id": book_id})
            raise

        if deleted:
            logger.info("Book deleted", extra={"book_id": book_id})
        return deleted

    async def toggle_availability(self, book_id: int) -> BookModel:
        """
        Flip a book's availability flag.

        Raises:
            NotFound: If the book does not exist
        """
        book = await self.get_book(book_id)
        return await self.update_book(book_id, is_available=not book.is_available)

    async def update_stock(self, book_id: int, quantity: int) -> bool:
        """
        Push a new stock level for a catalog book to the inventory service.

        Args:
            book_id: Book whose stock changes
            quantity: New non-negative quantity

        Returns:
            bool: False if the book is absent, no gateway is configured or
            the inventory service did not accept the update

        Raises:
            ValidationError: If quantity is negative
        """
        if quantity < 0:
            raise ValidationError(
                "Quantity cannot be negative",
                field="quantity",
                rule="non_negative",
            )
        if not await book_crud.exists(self.book_db, book_id):
            return False
        if self.stock_gateway is None:
            return False
        return await self.stock_gateway.set_stock(book_id, quantity)

    async def get_book(self, book_id: int) -> BookModel:
        """
        Get book by ID.

        Raises:
            NotFound: If the book does not exist
        """
        book = await book_crud.get_by_id(self.book_db, book_id)
        if book is None:
            raise NotFound("Book", book_id)
        return book

    async def list_books(
        self,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[BookModel]:
        return await book_crud.get_all(self.book_db, limit=limit, offset=offset)

    async def books_by_author(self, author_id: int) -> Sequence[BookModel]:
        return await book_crud.get_by_author_id(self.book_db, author_id)

    async def available_books(self) -> Sequence[BookModel]:
        return await book_crud.get_available(self.book_db)

    async def search_books(self, term: str) -> Sequence[BookModel]:
        """Case-insensitive match on title or description; blank terms match nothing."""
        if not term or not term.strip():
            return []
        return await book_crud.search(self.book_db, term.strip())

    async def count_books(self) -> int:
        return await book_crud.count(self.book_db)
