"""
SQLAlchemy declarative bases and common mixins.

Each record store owns its own declarative base so that the author and
book schemas never share metadata, foreign keys or a transaction.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class AuthorStoreBase(DeclarativeBase):
    """
    Declarative base for models persisted in the author store.

    Tables registered here are created on the author engine only.
    """

    pass


class BookStoreBase(DeclarativeBase):
    """
    Declarative base for models persisted in the book store.

    Tables registered here are created on the book engine only.
    """

    pass


class IntegerIdMixin:
    """
    Mixin providing a store-assigned integer primary key.

    Attributes:
        id: Autoincrement primary key assigned by the store on insert
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every update via onupdate hook.
    Both use UTC timezone for consistency across deployments.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
