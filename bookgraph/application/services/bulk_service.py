"""
Bulk operations.

Each bulk operation is a sequence of independent single-entity commands
run through the author and book services. There is no rollback across
items: every item is attempted and reported with its own outcome, and a
failed item never stops the batch.

Dependencies: sqlalchemy, bookgraph.application.services, bookgraph.core
System role: Multi-record use case orchestration
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Awaitable

from sqlalchemy.exc import SQLAlchemyError

from bookgraph.application.services.author_service import AuthorService
from bookgraph.application.services.book_service import BookService
from bookgraph.core.exceptions import BookGraphException, NotFound, ValidationError
from bookgraph.core.money import to_money
from bookgraph.core.relationship_resolver import RelationshipResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkItemResult:
    """Outcome of one item of a bulk operation."""

    item_id: int
    succeeded: bool
    error_code: str | None = None
    error_message: str | None = None


class BulkService:
    """Bulk operations composed from single-entity commands."""

    def __init__(
        self,
        author_service: AuthorService,
        book_service: BookService,
        resolver: RelationshipResolver,
    ) -> None:
        """
        Initialize bulk service.

        Args:
            author_service: Single-author commands
            book_service: Single-book commands
            resolver: Read model used to select the items of a batch
        """
        self.author_service = author_service
        self.book_service = book_service
        self.resolver = resolver

    async def reprice_books(self, percentage_change: Decimal) -> list[BulkItemResult]:
        """
        Change every book's price by a percentage.

        New prices are rounded to cents. A change that would make a price
        negative fails for that book only.

        Args:
            percentage_change: e.g. 10 for +10%, -25 for -25%

        Returns:
            list[BulkItemResult]: One outcome per book
        """
        factor = 1 + Decimal(str(percentage_change)) / 100
        books = await self.book_service.list_books()
        prices = [(book.id, Decimal(str(book.price))) for book in books]

        results = []
        for book_id, price in prices:
            new_price = to_money(price * factor)
            results.append(
                await self._run(book_id, self.book_service.update_book(book_id, price=new_price))
            )

        self._log_summary("reprice_books", results, percentage_change=str(percentage_change))
        return results

    async def mark_author_books_unavailable(self, author_id: int) -> list[BulkItemResult]:
        """
        Set is_available to False on every book of an author.

        Returns:
            list[BulkItemResult]: One outcome per book (empty if none)
        """
        book_ids = await self._book_ids_of(author_id)

        results = []
        for book_id in book_ids:
            results.append(
                await self._run(
                    book_id,
                    self.book_service.update_book(book_id, is_available=False),
                )
            )

        self._log_summary("mark_author_books_unavailable", results, author_id=author_id)
        return results

    async def delete_authors_without_books(self) -> list[BulkItemResult]:
        """
        Delete every author no book references.

        Each delete re-runs the dependency check, so an author that gains a
        book after selection fails with dependency_conflict.

        Returns:
            list[BulkItemResult]: One outcome per selected author
        """
        author_ids = [author.id for author in await self.resolver.authors_without_books()]

        results = []
        for author_id in author_ids:
            results.append(await self._run(author_id, self._delete_author(author_id)))

        self._log_summary("delete_authors_without_books", results)
        return results

    async def transfer_books(
        self,
        from_author_id: int,
        to_author_id: int,
    ) -> list[BulkItemResult]:
        """
        Re-point every book of one author to another.

        Args:
            from_author_id: Current author of the books
            to_author_id: Author that receives the books

        Returns:
            list[BulkItemResult]: One outcome per book

        Raises:
            ValidationError: If both ids are the same
            ReferenceNotFound: If either author does not exist
        """
        if from_author_id == to_author_id:
            raise ValidationError(
                "Source and target author must differ",
                field="to_author_id",
                rule="distinct",
            )
        await self.book_service.guard.assert_author_exists(from_author_id, field="from_author_id")
        await self.book_service.guard.assert_author_exists(to_author_id, field="to_author_id")

        book_ids = await self._book_ids_of(from_author_id)

        results = []
        for book_id in book_ids:
            results.append(
                await self._run(
                    book_id,
                    self.book_service.update_book(book_id, author_id=to_author_id),
                )
            )

        self._log_summary(
            "transfer_books",
            results,
            from_author_id=from_author_id,
            to_author_id=to_author_id,
        )
        return results

    async def _book_ids_of(self, author_id: int) -> list[int]:
        # Plain ids: a rolled-back item expires every record loaded in the session
        return [book.id for book in await self.book_service.books_by_author(author_id)]

    async def _delete_author(self, author_id: int) -> None:
        if not await self.author_service.delete_author(author_id):
            raise NotFound("Author", author_id)

    async def _run(self, item_id: int, command: Awaitable) -> BulkItemResult:
        try:
            await command
        except BookGraphException as e:
            return BulkItemResult(
                item_id=item_id,
                succeeded=False,
                error_code=e.code,
                error_message=e.message,
            )
        except SQLAlchemyError as e:
            return BulkItemResult(
                item_id=item_id,
                succeeded=False,
                error_code="store_error",
                error_message=str(e),
            )
        return BulkItemResult(item_id=item_id, succeeded=True)

    def _log_summary(self, operation: str, results: list[BulkItemResult], **context) -> None:
        failed = sum(1 for result in results if not result.succeeded)
        logger.info(
            "Bulk operation finished",
            extra={
                "operation": operation,
                "total": len(results),
                "succeeded": len(results) - failed,
                "failed": failed,
                **context,
            },
        )
