"""
Author ORM model.

Represents an author record owned exclusively by the author store.

Dependencies: sqlalchemy, bookgraph.boundary.db.base
System role: Author persistence
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from bookgraph.boundary.db.base import AuthorStoreBase, IntegerIdMixin, TimestampMixin


class AuthorModel(AuthorStoreBase, IntegerIdMixin, TimestampMixin):
    """
    Author ORM model.

    There is deliberately no relationship to BookModel: books live in a
    different database and reference authors by value only.

    Attributes:
        id: Store-assigned integer identifier
        name: Display name (200 char limit)
        email: Lower-cased email, unique across authors (checked, not constrained)
        date_of_birth: Birth date, never in the future
        created_at: Row creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Author name",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Normalized (trimmed, lower-cased) email address",
    )

    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Date of birth",
    )

    def __repr__(self) -> str:
        return f"<AuthorModel id={self.id} email={self.email!r}>"
