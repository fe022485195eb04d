"""
Book domain models and schemas.

Request/response schemas for book operations. Field rules (lengths,
non-negative price) are enforced by the book service so that violations
are reported with the violated rule.

Dependencies: pydantic
System role: Book API contracts
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CreateBookRequest(BaseModel):
    """Request schema for creating a new book."""

    title: str = Field(..., description="Book title")
    author_id: int = Field(..., description="Identifier of an existing author")
    price: Decimal = Field(..., description="Non-negative price")
    description: str = Field(default="", description="Book description")
    published_date: datetime | None = Field(
        default=None,
        description="Publication time (defaults to now)",
    )
    is_available: bool = Field(default=True, description="Availability flag")


class UpdateBookRequest(BaseModel):
    """Request schema for a partial book update; omitted fields stay unchanged."""

    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    is_available: bool | None = None
    author_id: int | None = None


class RepriceBooksRequest(BaseModel):
    """Request schema for a bulk price change."""

    percentage_change: Decimal = Field(..., description="e.g. 10 for +10%, -25 for -25%")


class BookSummary(BaseModel):
    """Minimal book reference embedded in other responses."""

    id: int
    title: str
    price: Decimal


class BookResponse(BaseModel):
    """Response schema for a book with its resolved author and derived fields."""

    id: int
    title: str
    description: str
    price: Decimal
    formatted_price: str
    author_id: int
    author_name: str | None
    has_valid_author: bool
    published_date: datetime
    age_years: int
    is_available: bool
    created_at: datetime
    updated_at: datetime


class LowStockBookResponse(BaseModel):
    """Response schema for a catalog book reported low on stock."""

    id: int
    title: str
    quantity: int
    last_updated: datetime | None
