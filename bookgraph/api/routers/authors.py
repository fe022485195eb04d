"""
Author API endpoints.

Routes:
- GET /authors - List authors with derived fields
- POST /authors - Create author
- GET /authors/without-books - Authors no book references
- DELETE /authors/without-books - Bulk delete of those authors
- GET /authors/{id} - Get single author
- PATCH /authors/{id} - Partial update
- DELETE /authors/{id} - Delete author (409 while books reference it)
- GET /authors/{id}/books - Books of an author
- POST /authors/{id}/books/unavailable - Bulk mark the author's books unavailable
- POST /authors/{id}/transfer-books - Bulk re-point the author's books

Dependencies: bookgraph.application.services, bookgraph.core, bookgraph.models
System role: Author management HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from bookgraph.api.deps.dependencies import (
    get_author_service,
    get_bulk_service,
    get_relationship_resolver,
)
from bookgraph.application.services import AuthorService, BulkService
from bookgraph.core.exceptions import NotFound
from bookgraph.core.relationship_resolver import RelationshipResolver
from bookgraph.models.author import (
    AuthorResponse,
    CreateAuthorRequest,
    TransferBooksRequest,
    UpdateAuthorRequest,
)
from bookgraph.models.book import BookResponse
from bookgraph.models.common import BulkOperationResponse

from .router_utils.error_handling import handle_domain_errors
from .router_utils.responses import (
    map_author_to_response,
    map_authors_to_response,
    map_books_to_response,
    map_bulk_results,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", response_model=list[AuthorResponse])
@handle_domain_errors
async def list_authors(
    limit: int = 100,
    offset: int = 0,
    author_service: AuthorService = Depends(get_author_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[AuthorResponse]:
    """
    List authors with pagination; books are resolved in one batch.

    Args:
        limit: Maximum number of authors (default 100)
        offset: Number to skip (default 0)
    """
    authors = await author_service.list_authors(limit=limit, offset=offset)
    resolved = await resolver.resolve_authors(authors)

    logger.info("Authors listed", extra={"count": len(resolved), "limit": limit, "offset": offset})
    return map_authors_to_response(resolved)


@router.post("", response_model=AuthorResponse, status_code=201)
@handle_domain_errors
async def create_author(
    request: CreateAuthorRequest,
    author_service: AuthorService = Depends(get_author_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> AuthorResponse:
    """
    Create new author.

    Raises:
        HTTPException(400): Invalid field
        HTTPException(409): Email already used
    """
    author = await author_service.create_author(
        name=request.name,
        email=request.email,
        date_of_birth=request.date_of_birth,
    )
    return map_author_to_response(await resolver.resolve_author(author))


@router.get("/without-books", response_model=list[AuthorResponse])
@handle_domain_errors
async def list_authors_without_books(
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[AuthorResponse]:
    """List authors that no book references."""
    authors = await resolver.authors_without_books()
    return map_authors_to_response(await resolver.resolve_authors(authors))


@router.delete("/without-books", response_model=BulkOperationResponse)
@handle_domain_errors
async def delete_authors_without_books(
    bulk_service: BulkService = Depends(get_bulk_service),
) -> BulkOperationResponse:
    """Delete every author that no book references; one outcome per author."""
    return map_bulk_results(await bulk_service.delete_authors_without_books())


@router.get("/{author_id}", response_model=AuthorResponse)
@handle_domain_errors
async def get_author(
    author_id: int,
    author_service: AuthorService = Depends(get_author_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> AuthorResponse:
    """
    Get single author by ID.

    Raises:
        HTTPException(404): Author not found
    """
    author = await author_service.get_author(author_id)
    return map_author_to_response(await resolver.resolve_author(author))


@router.patch("/{author_id}", response_model=AuthorResponse)
@handle_domain_errors
async def update_author(
    author_id: int,
    request: UpdateAuthorRequest,
    author_service: AuthorService = Depends(get_author_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> AuthorResponse:
    """
    Update the supplied author fields.

    Raises:
        HTTPException(404): Author not found
        HTTPException(400): Invalid field
        HTTPException(409): Email already used by another author
    """
    author = await author_service.update_author(
        author_id=author_id,
        name=request.name,
        email=request.email,
        date_of_birth=request.date_of_birth,
    )
    return map_author_to_response(await resolver.resolve_author(author))


@router.delete("/{author_id}", status_code=204)
@handle_domain_errors
async def delete_author(
    author_id: int,
    author_service: AuthorService = Depends(get_author_service),
) -> None:
    """
    Delete author by ID.

    Raises:
        HTTPException(404): Author not found
        HTTPException(409): Books still reference the author
    """
    if not await author_service.delete_author(author_id):
        raise NotFound("Author", author_id)


@router.get("/{author_id}/books", response_model=list[BookResponse])
@handle_domain_errors
async def list_author_books(
    author_id: int,
    author_service: AuthorService = Depends(get_author_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> list[BookResponse]:
    """
    List the books of an author.

    Raises:
        HTTPException(404): Author not found
    """
    author = await author_service.get_author(author_id)
    resolver.authors_by_id.prime(author.id, author)
    books = await resolver.books_for_author(author)
    return map_books_to_response(await resolver.resolve_books(books))


@router.post("/{author_id}/books/unavailable", response_model=BulkOperationResponse)
@handle_domain_errors
async def mark_author_books_unavailable(
    author_id: int,
    bulk_service: BulkService = Depends(get_bulk_service),
) -> BulkOperationResponse:
    """Mark every book of an author unavailable; one outcome per book."""
    return map_bulk_results(await bulk_service.mark_author_books_unavailable(author_id))


@router.post("/{author_id}/transfer-books", response_model=BulkOperationResponse)
@handle_domain_errors
async def transfer_books(
    author_id: int,
    request: TransferBooksRequest,
    bulk_service: BulkService = Depends(get_bulk_service),
) -> BulkOperationResponse:
    """
    Re-point every book of an author to another author.

    Raises:
        HTTPException(400): Source and target are the same author
        HTTPException(422): Either author does not exist
    """
    results = await bulk_service.transfer_books(
        from_author_id=author_id,
        to_author_id=request.to_author_id,
    )
    return map_bulk_results(results)
