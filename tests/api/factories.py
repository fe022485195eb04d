"""
Builders for API test doubles.

Produce unsaved ORM instances and resolved bundles shaped like what the
services and resolver return.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from bookgraph.boundary.db.models import AuthorModel, BookModel
from bookgraph.core.relationship_resolver import ResolvedAuthor, ResolvedBook

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def author(author_id: int = 1, **overrides) -> AuthorModel:
    fields = {
        "id": author_id,
        "name": "A. Writer",
        "email": "a@x.com",
        "date_of_birth": date(1970, 1, 1),
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return AuthorModel(**fields)


def book(book_id: int = 1, author_id: int = 1, **overrides) -> BookModel:
    fields = {
        "id": book_id,
        "title": "T",
        "description": "",
        "price": Decimal("10.00"),
        "author_id": author_id,
        "published_date": datetime(2020, 1, 1, tzinfo=timezone.utc),
        "is_available": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return BookModel(**fields)


def resolved_book(book_model: BookModel, author_model: AuthorModel | None) -> ResolvedBook:
    return ResolvedBook(
        book=book_model,
        author=author_model,
        formatted_price=f"${book_model.price}",
        age_years=6,
    )


def resolved_author(author_model: AuthorModel, books: list[BookModel]) -> ResolvedAuthor:
    return ResolvedAuthor(
        author=author_model,
        books=books,
        age_years=56,
        total_books_value=sum((b.price for b in books), Decimal("0.00")),
        most_expensive_book=books[0] if books else None,
        years_since_first_publication=6 if books else None,
    )


def mock_resolver() -> MagicMock:
    """Resolver double: async read methods, sync loaders."""
    resolver = MagicMock()
    for name in (
        "resolve_book",
        "resolve_books",
        "resolve_author",
        "resolve_authors",
        "books_for_author",
        "authors_without_books",
        "inventory_for_book",
        "low_stock_books",
        "catalog_statistics",
    ):
        setattr(resolver, name, AsyncMock())
    return resolver
