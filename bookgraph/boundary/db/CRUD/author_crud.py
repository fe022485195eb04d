"""
Author CRUD operations.

Author store accessor: BaseCRUD over AuthorModel plus email lookup.

Dependencies: sqlalchemy, bookgraph.boundary.db.models
System role: Author persistence operations
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.CRUD.base_crud import BaseCRUD
from bookgraph.boundary.db.models.author_model import AuthorModel


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address for storage and comparison."""
    return email.strip().lower()


class AuthorCRUD(BaseCRUD[AuthorModel]):
    """CRUD operations for AuthorModel."""

    def __init__(self) -> None:
        """Initialize AuthorCRUD with AuthorModel."""
        super().__init__(AuthorModel)

    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> AuthorModel | None:
        """
        Retrieve the author holding an email, compared case-insensitively.

        Args:
            session: Author store session
            email: Email in any case, surrounding whitespace ignored

        Returns:
            First matching AuthorModel (lowest id), None if no author holds it
        """
        stmt = (
            select(AuthorModel)
            .where(func.lower(AuthorModel.email) == normalize_email(email))
            .order_by(AuthorModel.id)
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()


author_crud = AuthorCRUD()
