"""
Author domain models and schemas.

Request/response schemas for author operations.

Dependencies: pydantic
System role: Author API contracts
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookgraph.models.book import BookSummary


class CreateAuthorRequest(BaseModel):
    """Request schema for creating a new author."""

    name: str = Field(..., description="Author name")
    email: str = Field(..., description="Unique email address")
    date_of_birth: date = Field(..., description="Date of birth")


class UpdateAuthorRequest(BaseModel):
    """Request schema for a partial author update; omitted fields stay unchanged."""

    name: str | None = None
    email: str | None = None
    date_of_birth: date | None = None


class TransferBooksRequest(BaseModel):
    """Request schema for moving every book of an author to another author."""

    to_author_id: int = Field(..., description="Author receiving the books")


class AuthorResponse(BaseModel):
    """Response schema for an author with derived fields."""

    id: int
    name: str
    email: str
    date_of_birth: date
    age_years: int
    books_count: int
    available_books_count: int
    total_books_value: Decimal
    most_expensive_book: BookSummary | None
    years_since_first_publication: int | None
    created_at: datetime
    updated_at: datetime
