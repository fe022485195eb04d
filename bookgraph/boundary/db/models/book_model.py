"""
Book ORM model.

Represents a book record owned exclusively by the book store.

Dependencies: sqlalchemy, bookgraph.boundary.db.base
System role: Book persistence
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bookgraph.boundary.db.base import BookStoreBase, IntegerIdMixin, TimestampMixin, utc_now


class BookModel(BookStoreBase, IntegerIdMixin, TimestampMixin):
    """
    Book ORM model.

    author_id is an Author identifier held by value. It is not a foreign
    key: the author store is a separate database, so the reference is only
    as valid as the integrity checks run by the command services.

    Attributes:
        id: Store-assigned integer identifier
        title: Book title (500 char limit)
        description: Free text (2000 char limit, may be empty)
        price: Non-negative price with two decimal places
        author_id: Identifier of an Author in the author store
        published_date: Publication timestamp
        is_available: Availability flag
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        doc="Book title",
    )

    description: Mapped[str] = mapped_column(
        String(2000),
        nullable=False,
        default="",
        doc="Book description",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        doc="Price",
    )

    author_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        doc="Author identifier in the author store (no FK constraint)",
    )

    published_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        doc="Publication date",
    )

    is_available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        doc="Whether the book is currently available",
    )

    def __repr__(self) -> str:
        return f"<BookModel id={self.id} author_id={self.author_id}>"
