"""
Book API endpoints.

Routes:
- GET /books - List books with resolved authors
- POST /books - Create book
- GET /books/search?term= - Search title and description
- GET /books/available - Available books
- GET /books/low-stock - Books the inventory service reports low
- POST /books/reprice - Bulk price change by percentage
- GET /books/{id} - Get single book
- PATCH /books/{id} - Partial update
- DELETE /books/{id} - Delete book
- POST /books/{id}/toggle-availability - Flip availability
- GET /books/{id}/inventory - Stock level from the inventory service
- PUT /books/{id}/stock - Set stock level in the inventory service

Dependencies: bookgraph.application.services, bookgraph.core, bookgraph.models
System role: Book management HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from bookgraph.api.deps.dependencies import (
    get_book_service,
    get_bulk_service,
    get_relationship_resolver,
)
from bookgraph.application.services import BookService, BulkService
from bookgraph.core.exceptions import NotFound
from bookgraph.core.relationship_resolver import RelationshipResolver
from bookgraph.models.book import (
    BookResponse,
    CreateBookRequest,
    LowStockBookResponse,
    RepriceBooksRequest,
    UpdateBookRequest,
)
from bookgraph.models.common import BulkOperationResponse
from bookgraph.models.inventory import (
    InventoryRecord,
    UpdateStockRequest,
    UpdateStockResponse,
)

from .router_utils.error_handling import handle_domain_errors
from .router_utils.responses import (
    map_book_to_response,
    map_books_to_response,
    map_bulk_results,
    map_low_stock_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[BookResponse])
@handle_domain_errors
async def list_books(
    limit: int = 100,
    offset: int = 0,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[BookResponse]:
    """
    List books with pagination; authors are resolved in one batch.

    Args:
        limit: Maximum number of books (default 100)
        offset: Number to skip (default 0)
    """
    books = await book_service.list_books(limit=limit, offset=offset)
    resolved = await resolver.resolve_books(books)

    logger.info("Books listed", extra={"count": len(resolved), "limit": limit, "offset": offset})
    return map_books_to_response(resolved)


@router.post("", response_model=BookResponse, status_code=201)
@handle_domain_errors
async def create_book(
    request: CreateBookRequest,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> BookResponse:
    """
    Create new book.

    Raises:
        HTTPException(400): Invalid field
        HTTPException(422): author_id does not reference an existing author
    """
    book = await book_service.create_book(
        title=request.title,
        author_id=request.author_id,
        price=request.price,
        description=request.description,
        published_date=request.published_date,
        is_available=request.is_available,
    )
    return map_book_to_response(await resolver.resolve_book(book))


@router.get("/search", response_model=list[BookResponse])
@handle_domain_errors
async def search_books(
    term: str,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[BookResponse]:
    """Case-insensitive search over title and description."""
    books = await book_service.search_books(term)
    return map_books_to_response(await resolver.resolve_books(books))


@router.get("/available", response_model=list[BookResponse])
@handle_domain_errors
async def list_available_books(
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[BookResponse]:
    """List books whose availability flag is set."""
    books = await book_service.available_books()
    return map_books_to_response(await resolver.resolve_books(books))


@router.get("/low-stock", response_model=list[LowStockBookResponse])
@handle_domain_errors
async def list_low_stock_books(
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[LowStockBookResponse]:
    """List catalog books the inventory service reports as low on stock."""
    return map_low_stock_to_response(await resolver.low_stock_books())


@router.post("/reprice", response_model=BulkOperationResponse)
@handle_domain_errors
async def reprice_books(
    request: RepriceBooksRequest,
    bulk_service: BulkService = Depends(get_bulk_service),
) -> BulkOperationResponse:
    """Change every book's price by a percentage; one outcome per book."""
    return map_bulk_results(await bulk_service.reprice_books(request.percentage_change))


@router.get("/{book_id}", response_model=BookResponse)
@handle_domain_errors
async def get_book(
    book_id: int,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> BookResponse:
    """
    Get single book by ID.

    Raises:
        HTTPException(404): Book not found
    """
    book = await book_service.get_book(book_id)
    return map_book_to_response(await resolver.resolve_book(book))


@router.patch("/{book_id}", response_model=BookResponse)
@handle_domain_errors
async def update_book(
    book_id: int,
    request: UpdateBookRequest,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> BookResponse:
    """
    Update the supplied book fields.

    Raises:
        HTTPException(404): Book not found
        HTTPException(400): Invalid field
        HTTPException(422): New author_id does not reference an existing author
    """
    book = await book_service.update_book(
        book_id=book_id,
        title=request.title,
        description=request.description,
        price=request.price,
        is_available=request.is_available,
        author_id=request.author_id,
    )
    return map_book_to_response(await resolver.resolve_book(book))


@router.delete("/{book_id}", status_code=204)
@handle_domain_errors
async def delete_book(
    book_id: int,
    book_service: BookService = Depends(get_book_service),
) -> None:
    """
    Delete book by ID.

    Raises:
        HTTPException(404): Book not found
    """
    if not await book_service.delete_book(book_id):
        raise NotFound("Book", book_id)


@router.post("/{book_id}/toggle-availability", response_model=BookResponse)
@handle_domain_errors
async def toggle_availability(
    book_id: int,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> BookResponse:
    """Flip a book's availability flag."""
    book = await book_service.toggle_availability(book_id)
    return map_book_to_response(await resolver.resolve_book(book))


@router.get("/{book_id}/inventory", response_model=InventoryRecord | None)
@handle_domain_errors
async def get_book_inventory(
    book_id: int,
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> InventoryRecord | None:
    """
    Stock level of a book; null when the inventory service has no answer.

    Raises:
        HTTPException(404): Book not found
    """
    await book_service.get_book(book_id)
    return await resolver.inventory_for_book(book_id)


@router.put("/{book_id}/stock", response_model=UpdateStockResponse)
@handle_domain_errors
async def update_stock(
    book_id: int,
    request: UpdateStockRequest,
    book_service: BookService = Depends(get_book_service),
) -> UpdateStockResponse:
    """
    Set a book's stock level in the inventory service.

    Raises:
        HTTPException(404): Book not found
        HTTPException(400): Negative quantity
    """
    await book_service.get_book(book_id)
    updated = await book_service.update_stock(book_id, request.quantity)
    return UpdateStockResponse(book_id=book_id, quantity=request.quantity, updated=updated)
