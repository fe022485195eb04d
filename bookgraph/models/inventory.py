"""
Inventory domain models and schemas.

Wire format of the external inventory API (camelCase) and the API response
for stock operations.

Dependencies: pydantic
System role: Stock Gateway contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InventoryRecord(BaseModel):
    """Stock level of one book as reported by the inventory service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book_id: int
    quantity: int
    last_updated: datetime | None = None


class StockUpdate(BaseModel):
    """Request body sent to the inventory service when setting stock."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book_id: int
    quantity: int


class UpdateStockRequest(BaseModel):
    """Request schema for setting a book's stock level."""

    quantity: int = Field(..., description="New stock quantity")


class UpdateStockResponse(BaseModel):
    """Response schema for a stock update; updated is false on degradation."""

    book_id: int
    quantity: int
    updated: bool
