"""
Book CRUD operations.

Book store accessor: BaseCRUD over BookModel plus queries keyed by the
value-held author reference.

Dependencies: sqlalchemy, bookgraph.boundary.db.models
System role: Book persistence operations
"""

from decimal import Decimal
from typing import Iterable, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.CRUD.base_crud import BaseCRUD
from bookgraph.boundary.db.models.book_model import BookModel


class BookCRUD(BaseCRUD[BookModel]):
    """
    CRUD operations for BookModel.

    All author-keyed queries filter on the plain author_id column; there is
    no join to the author store.
    """

    def __init__(self) -> None:
        """Initialize BookCRUD with BookModel."""
        super().__init__(BookModel)

    async def get_by_author_id(
        self,
        session: AsyncSession,
        author_id: int,
    ) -> Sequence[BookModel]:
        """
        Retrieve all books referencing one author.

        Args:
            session: Book store session
            author_id: Author identifier

        Returns:
            Books in store iteration order (by id)
        """
        return await self.find(session, BookModel.author_id == author_id)

    async def get_by_author_ids(
        self,
        session: AsyncSession,
        author_ids: Iterable[int],
    ) -> Sequence[BookModel]:
        """
        Retrieve all books referencing any of the given authors, in one query.

        Args:
            session: Book store session
            author_ids: Author identifiers (duplicates are harmless)

        Returns:
            Books in store iteration order (by id)
        """
        distinct_ids = list(dict.fromkeys(author_ids))
        if not distinct_ids:
            return []
        return await self.find(session, BookModel.author_id.in_(distinct_ids))

    async def get_available(self, session: AsyncSession) -> Sequence[BookModel]:
        """Retrieve every book whose availability flag is set."""
        return await self.find(session, BookModel.is_available.is_(True))

    async def search(
        self,
        session: AsyncSession,
        term: str,
    ) -> Sequence[BookModel]:
        """
        Case-insensitive substring search over title and description.

        Args:
            session: Book store session
            term: Search term

        Returns:
            Matching books in store iteration order
        """
        pattern = f"%{term}%"
        return await self.find(
            session,
            or_(BookModel.title.ilike(pattern), BookModel.description.ilike(pattern)),
        )

    async def exists_for_author(self, session: AsyncSession, author_id: int) -> bool:
        """
        Check whether at least one book references an author.

        Args:
            session: Book store session
            author_id: Author identifier

        Returns:
            True if any book holds author_id
        """
        stmt = select(BookModel.id).where(BookModel.author_id == author_id).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count_for_author(self, session: AsyncSession, author_id: int) -> int:
        """Count the books referencing an author."""
        return await self.count(session, BookModel.author_id == author_id)

    async def average_price(self, session: AsyncSession) -> Decimal | None:
        """Average book price, or None when the store is empty."""
        result = await session.execute(select(func.avg(BookModel.price)))
        average = result.scalar_one_or_none()
        return Decimal(str(average)) if average is not None else None

    async def get_most_expensive(self, session: AsyncSession) -> BookModel | None:
        """Highest-priced book; ties go to the lowest id."""
        stmt = (
            select(BookModel)
            .order_by(BookModel.price.desc(), BookModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_newest(self, session: AsyncSession) -> BookModel | None:
        """Most recently published book; ties go to the lowest id."""
        stmt = (
            select(BookModel)
            .order_by(BookModel.published_date.desc(), BookModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


book_crud = BookCRUD()
