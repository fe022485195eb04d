"""
Common response models.

Error, bulk outcome, statistics and health schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from bookgraph.models.book import BookSummary


class ErrorResponse(BaseModel):
    """Error payload carried in the HTTPException detail."""

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Offending field/relationship and rule")


class BulkItemResponse(BaseModel):
    """Outcome of one item of a bulk operation."""

    item_id: int
    succeeded: bool
    error_code: str | None = None
    error_message: str | None = None


class BulkOperationResponse(BaseModel):
    """Per-item outcomes of a bulk operation."""

    total: int
    succeeded: int
    failed: int
    items: list[BulkItemResponse]


class CatalogStatisticsResponse(BaseModel):
    """Catalog-wide aggregates."""

    total_books: int
    total_authors: int
    average_price: Decimal | None
    most_expensive_book: BookSummary | None
    newest_book: BookSummary | None


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
