"""
Base CRUD operations for SQLAlchemy models.

Provides the generic store accessor contract: get-by-id, get-by-ids,
get-by-predicate, insert, update, delete, count and exists. Model-specific
CRUD classes inherit and extend it. Every operation touches a single store
through the session it is given; nothing here spans stores.

Dependencies: sqlalchemy
System role: Foundation for all record store operations
"""

from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.base import utc_now

ModelT = TypeVar("ModelT", bound=Any)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any model using
    IntegerIdMixin and TimestampMixin. Subclasses specify the model class
    and add model-specific queries.

    Type Parameters:
        ModelT: SQLAlchemy model class

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the store.

        Args:
            session: Async session for the owning store
            **kwargs: Model field values

        Returns:
            Created model instance with store-assigned ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: int) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async session for the owning store
            id: Integer primary key

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(
        self,
        session: AsyncSession,
        ids: Iterable[int],
    ) -> Sequence[ModelT]:
        """
        Retrieve every record whose primary key is in ids, in one query.

        Args:
            session: Async session for the owning store
            ids: Primary keys to fetch (duplicates are harmless)

        Returns:
            Sequence of the matching records ordered by id; missing ids are
            simply absent
        """
        distinct_ids = list(dict.fromkeys(ids))
        if not distinct_ids:
            return []
        stmt = (
            select(self.model)
            .where(self.model.id.in_(distinct_ids))
            .order_by(self.model.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def find(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> Sequence[ModelT]:
        """
        Retrieve all records matching a predicate.

        Args:
            session: Async session for the owning store
            *criteria: SQLAlchemy WHERE clauses, combined with AND

        Returns:
            Sequence of matching records in store iteration order (by id)
        """
        stmt = select(self.model).where(*criteria).order_by(self.model.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records with optional pagination.

        Args:
            session: Async session for the owning store
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances ordered by id
        """
        stmt = select(self.model).order_by(self.model.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: int,
        **kwargs,
    ) -> ModelT | None:
        """
        Update a record by primary key.

        Only the supplied fields change. updated_at is refreshed whenever at
        least one field is supplied, even if the new value equals the old one.

        Args:
            session: Async session for the owning store
            id: Integer primary key
            **kwargs: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None

        if kwargs:
            for field, value in kwargs.items():
                setattr(instance, field, value)
            instance.updated_at = utc_now()
            await session.flush()
            await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: int) -> bool:
        """
        Delete a record by primary key.

        Args:
            session: Async session for the owning store
            id: Integer primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def count(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> int:
        """
        Count records, optionally restricted by a predicate.

        Args:
            session: Async session for the owning store
            *criteria: Optional WHERE clauses

        Returns:
            Number of matching records
        """
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def exists(self, session: AsyncSession, id: int) -> bool:
        """
        Check if a record exists by primary key.

        Args:
            session: Async session for the owning store
            id: Integer primary key

        Returns:
            True if record exists, False otherwise
        """
        stmt = select(self.model.id).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None
