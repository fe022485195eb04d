"""
Relationship resolver.

Read-path stitching of the Book/Author graph across the two stores. A
Book's author and an Author's books are resolved through per-request
batch loaders, so resolving N books (or M authors) costs one query per
store per batch regardless of N. Derived fields (formatted price, ages,
totals) are computed here and never persisted.

A Book whose author_id no longer resolves is tolerated: its author is
None and has_valid_author is False. The resolver never writes.

Dependencies: sqlalchemy, bookgraph.core.batch_loader, bookgraph.boundary
System role: Cross-store read model
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.base import utc_now
from bookgraph.boundary.db.CRUD.author_crud import author_crud
from bookgraph.boundary.db.CRUD.book_crud import book_crud
from bookgraph.boundary.db.models import AuthorModel, BookModel
from bookgraph.boundary.inventory.stock_gateway import StockGateway
from bookgraph.core.batch_loader import (
    author_loader,
    book_loader,
    books_by_author_loader,
)
from bookgraph.core.money import format_price, to_money
from bookgraph.models.inventory import InventoryRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedBook:
    """A Book with its author and every derived field."""

    book: BookModel
    author: AuthorModel | None
    formatted_price: str
    age_years: int

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author is not None else None

    @property
    def has_valid_author(self) -> bool:
        return self.author is not None


@dataclass(frozen=True)
class ResolvedAuthor:
    """An Author with its books and every derived field."""

    author: AuthorModel
    books: list[BookModel]
    age_years: int
    total_books_value: Decimal
    most_expensive_book: BookModel | None
    years_since_first_publication: int | None

    @property
    def books_count(self) -> int:
        return len(self.books)

    @property
    def available_books(self) -> list[BookModel]:
        return [book for book in self.books if book.is_available]


@dataclass(frozen=True)
class LowStockBook:
    """A catalog book the inventory service reports as low on stock."""

    book: BookModel
    inventory: InventoryRecord


@dataclass(frozen=True)
class CatalogStatistics:
    """Catalog-wide aggregates."""

    total_books: int
    total_authors: int
    average_price: Decimal | None
    most_expensive_book: BookModel | None
    newest_book: BookModel | None


def _most_expensive(books: Sequence[BookModel]) -> BookModel | None:
    # strict comparison keeps the first book in store order on ties
    best: BookModel | None = None
    for book in books:
        if best is None or book.price > best.price:
            best = book
    return best


def _total_value(books: Sequence[BookModel]) -> Decimal:
    return to_money(sum((Decimal(str(book.price)) for book in books), Decimal("0")))


class RelationshipResolver:
    """
    Per-request resolver over both stores.

    Holds its own batch loaders, so an instance must not outlive the
    request it was created for.

    Attributes:
        author_db: Author store session
        book_db: Book store session
        stock_gateway: Optional inventory gateway
        currency_symbol: Prefix for formatted prices
    """

    def __init__(
        self,
        author_db: AsyncSession,
        book_db: AsyncSession,
        stock_gateway: StockGateway | None = None,
        currency_symbol: str = "$",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize resolver and its request-scoped loaders.

        Args:
            author_db: Author store session
            book_db: Book store session
            stock_gateway: Inventory gateway (None disables stock lookups)
            currency_symbol: Prefix for formatted prices
            clock: Source of "now" for age calculations
        """
        self.author_db = author_db
        self.book_db = book_db
        self.stock_gateway = stock_gateway
        self.currency_symbol = currency_symbol
        self._clock = clock

        self.authors_by_id = author_loader(author_db)
        self.books_by_id = book_loader(book_db)
        self.books_by_author_id = books_by_author_loader(book_db)

    # Book -> Author

    async def author_for_book(self, book: BookModel) -> AuthorModel | None:
        """
        Resolve a Book's author.

        Returns:
            The Author, or None if author_id no longer resolves
        """
        author = await self.authors_by_id.load(book.author_id)
        if author is None:
            logger.warning(
                "Book references a missing author",
                extra={"book_id": book.id, "author_id": book.author_id},
            )
        return author

    async def authors_for_books(
        self,
        books: Iterable[BookModel],
    ) -> dict[int, AuthorModel]:
        """
        Resolve the authors of many books with one author store query.

        Returns:
            dict: author_id -> Author for every referenced id that exists
        """
        return await self.authors_by_id.load_many(book.author_id for book in books)

    # Book derived fields

    def formatted_price(self, book: BookModel) -> str:
        """Price with currency prefix and two decimals, e.g. "$10.00"."""
        return format_price(book.price, self.currency_symbol)

    def book_age_years(self, book: BookModel) -> int:
        """Whole years between the publication year and the current year."""
        return self._clock().year - book.published_date.year

    async def author_name(self, book: BookModel) -> str | None:
        author = await self.author_for_book(book)
        return author.name if author is not None else None

    async def has_valid_author(self, book: BookModel) -> bool:
        return await self.author_for_book(book) is not None

    # Author -> Books

    async def books_for_author(self, author: AuthorModel) -> list[BookModel]:
        """Books referencing one author, in store order."""
        return (await self.books_for_authors([author]))[author.id]

    async def books_for_authors(
        self,
        authors: Iterable[AuthorModel],
    ) -> dict[int, list[BookModel]]:
        """
        Resolve the books of many authors with one book store query.

        Returns:
            dict: author_id -> books (empty list for authors without books)
        """
        author_ids = [author.id for author in authors]
        grouped = await self.books_by_author_id.load_many(author_ids)
        return {author_id: list(grouped.get(author_id, [])) for author_id in author_ids}

    # Author derived fields

    def author_age_years(self, author: AuthorModel) -> int:
        """Whole years between the birth year and the current year."""
        return self._clock().year - author.date_of_birth.year

    async def books_count(self, author: AuthorModel) -> int:
        return len(await self.books_for_author(author))

    async def available_books(self, author: AuthorModel) -> list[BookModel]:
        return [book for book in await self.books_for_author(author) if book.is_available]

    async def total_books_value(self, author: AuthorModel) -> Decimal:
        """Sum of the author's book prices."""
        return _total_value(await self.books_for_author(author))

    async def most_expensive_book(self, author: AuthorModel) -> BookModel | None:
        """Highest-priced book; the first in store order wins a tie."""
        return _most_expensive(await self.books_for_author(author))

    async def years_since_first_publication(self, author: AuthorModel) -> int | None:
        """Years since the author's earliest publication, None without books."""
        return self._years_since_first_publication(await self.books_for_author(author))

    def _years_since_first_publication(self, books: Sequence[BookModel]) -> int | None:
        if not books:
            return None
        first_year = min(book.published_date.year for book in books)
        return self._clock().year - first_year

    # Aggregated views

    async def resolve_book(self, book: BookModel) -> ResolvedBook:
        return (await self.resolve_books([book]))[0]

    async def resolve_books(self, books: Sequence[BookModel]) -> list[ResolvedBook]:
        """
        Resolve many books with one author store query.

        Args:
            books: Books to resolve, in the order they should be returned

        Returns:
            list[ResolvedBook]: One bundle per book, same order
        """
        authors = await self.authors_for_books(books)
        return [
            ResolvedBook(
                book=book,
                author=authors.get(book.author_id),
                formatted_price=self.formatted_price(book),
                age_years=self.book_age_years(book),
            )
            for book in books
        ]

    async def resolve_author(self, author: AuthorModel) -> ResolvedAuthor:
        return (await self.resolve_authors([author]))[0]

    async def resolve_authors(self, authors: Sequence[AuthorModel]) -> list[ResolvedAuthor]:
        """
        Resolve many authors with one book store query.

        Args:
            authors: Authors to resolve, in the order they should be returned

        Returns:
            list[ResolvedAuthor]: One bundle per author, same order
        """
        books_by_author = await self.books_for_authors(authors)
        resolved = []
        for author in authors:
            books = books_by_author[author.id]
            resolved.append(
                ResolvedAuthor(
                    author=author,
                    books=books,
                    age_years=self.author_age_years(author),
                    total_books_value=_total_value(books),
                    most_expensive_book=_most_expensive(books),
                    years_since_first_publication=self._years_since_first_publication(books),
                )
            )
        return resolved

    # Catalog views

    async def inventory_for_book(self, book_id: int) -> InventoryRecord | None:
        """
        Stock level of one book from the inventory service.

        Returns:
            InventoryRecord, or None when no gateway is configured or the
            inventory service cannot answer
        """
        if self.stock_gateway is None:
            return None
        return await self.stock_gateway.get_inventory(book_id)

    async def low_stock_books(self) -> list[LowStockBook]:
        """
        Catalog books the inventory service reports as low on stock.

        Records for ids the book store does not hold are skipped.
        """
        if self.stock_gateway is None:
            return []
        records = await self.stock_gateway.list_low_stock()
        books = await self.books_by_id.load_many(record.book_id for record in records)
        return [
            LowStockBook(book=books[record.book_id], inventory=record)
            for record in records
            if record.book_id in books
        ]

    async def authors_without_books(self) -> list[AuthorModel]:
        """Authors referenced by no book, in store order."""
        authors = await author_crud.get_all(self.author_db)
        books_by_author = await self.books_for_authors(authors)
        return [author for author in authors if not books_by_author[author.id]]

    async def catalog_statistics(self) -> CatalogStatistics:
        """Totals, average price, most expensive and newest book."""
        total_books = await book_crud.count(self.book_db)
        total_authors = await author_crud.count(self.author_db)
        average = await book_crud.average_price(self.book_db)
        return CatalogStatistics(
            total_books=total_books,
            total_authors=total_authors,
            average_price=to_money(average) if average is not None else None,
            most_expensive_book=await book_crud.get_most_expensive(self.book_db),
            newest_book=await book_crud.get_newest(self.book_db),
        )
