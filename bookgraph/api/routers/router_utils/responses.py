"""
Response mapping utilities.

Transforms resolved views, ORM models and service results into Pydantic
response models. Centralizes response construction logic.

Dependencies: bookgraph.models, bookgraph.core.relationship_resolver
System role: Response transformation
"""

from typing import Sequence

from bookgraph.application.services.bulk_service import BulkItemResult
from bookgraph.boundary.db.models import BookModel
from bookgraph.core.relationship_resolver import (
    CatalogStatistics,
    LowStockBook,
    ResolvedAuthor,
    ResolvedBook,
)
from bookgraph.models.author import AuthorResponse
from bookgraph.models.book import BookResponse, BookSummary, LowStockBookResponse
from bookgraph.models.common import (
    BulkItemResponse,
    BulkOperationResponse,
    CatalogStatisticsResponse,
)


def map_book_summary(book: BookModel | None) -> BookSummary | None:
    if book is None:
        return None
    return BookSummary(id=book.id, title=book.title, price=book.price)


def map_book_to_response(resolved: ResolvedBook) -> BookResponse:
    """
    Transform a resolved book into BookResponse.

    Args:
        resolved: Book bundle from the relationship resolver

    Returns:
        BookResponse: Pydantic model for API response
    """
    book = resolved.book
    return BookResponse(
        id=book.id,
        title=book.title,
        description=book.description,
        price=book.price,
        formatted_price=resolved.formatted_price,
        author_id=book.author_id,
        author_name=resolved.author_name,
        has_valid_author=resolved.has_valid_author,
        published_date=book.published_date,
        age_years=resolved.age_years,
        is_available=book.is_available,
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


def map_books_to_response(resolved_books: Sequence[ResolvedBook]) -> list[BookResponse]:
    return [map_book_to_response(resolved) for resolved in resolved_books]


def map_author_to_response(resolved: ResolvedAuthor) -> AuthorResponse:
    """
    Transform a resolved author into AuthorResponse.

    Args:
        resolved: Author bundle from the relationship resolver

    Returns:
        AuthorResponse: Pydantic model for API response
    """
    author = resolved.author
    return AuthorResponse(
        id=author.id,
        name=author.name,
        email=author.email,
        date_of_birth=author.date_of_birth,
        age_years=resolved.age_years,
        books_count=resolved.books_count,
        available_books_count=len(resolved.available_books),
        total_books_value=resolved.total_books_value,
        most_expensive_book=map_book_summary(resolved.most_expensive_book),
        years_since_first_publication=resolved.years_since_first_publication,
        created_at=author.created_at,
        updated_at=author.updated_at,
    )


def map_authors_to_response(resolved_authors: Sequence[ResolvedAuthor]) -> list[AuthorResponse]:
    return [map_author_to_response(resolved) for resolved in resolved_authors]


def map_bulk_results(results: Sequence[BulkItemResult]) -> BulkOperationResponse:
    """
    Summarize per-item bulk outcomes.

    Args:
        results: Outcomes in processing order

    Returns:
        BulkOperationResponse: Totals plus every item outcome
    """
    items = [
        BulkItemResponse(
            item_id=result.item_id,
            succeeded=result.succeeded,
            error_code=result.error_code,
            error_message=result.error_message,
        )
        for result in results
    ]
    succeeded = sum(1 for item in items if item.succeeded)
    return BulkOperationResponse(
        total=len(items),
        succeeded=succeeded,
        failed=len(items) - succeeded,
        items=items,
    )


def map_statistics_to_response(stats: CatalogStatistics) -> CatalogStatisticsResponse:
    return CatalogStatisticsResponse(
        total_books=stats.total_books,
        total_authors=stats.total_authors,
        average_price=stats.average_price,
        most_expensive_book=map_book_summary(stats.most_expensive_book),
        newest_book=map_book_summary(stats.newest_book),
    )


def map_low_stock_to_response(items: Sequence[LowStockBook]) -> list[LowStockBookResponse]:
    return [
        LowStockBookResponse(
            id=item.book.id,
            title=item.book.title,
            quantity=item.inventory.quantity,
            last_updated=item.inventory.last_updated,
        )
        for item in items
    ]
