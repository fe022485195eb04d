"""
Author service orchestrator.

Validated create, update and delete of Authors. Every mutation runs the
field validators, then the integrity guard, then a single-record write
committed on the author store session.

Dependencies: sqlalchemy, bookgraph.boundary.db.CRUD, bookgraph.core
System role: Author use case orchestration
"""

import logging
from datetime import date, datetime
from typing import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.base import utc_now
from bookgraph.boundary.db.CRUD.author_crud import author_crud, normalize_email
from bookgraph.boundary.db.models import AuthorModel
from bookgraph.core.exceptions import NotFound
from bookgraph.core.integrity_guard import IntegrityGuard
from bookgraph.core.validators import validate_author_fields

logger = logging.getLogger(__name__)


class AuthorService:
    """Author service orchestrator."""

    def __init__(
        self,
        author_db: AsyncSession,
        book_db: AsyncSession,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize author service with one session per store.

        Args:
            author_db: Author store session (written)
            book_db: Book store session (read for dependency checks)
            clock: Source of "now" for the date-of-birth check
        """
        self.author_db = author_db
        self.book_db = book_db
        self.guard = IntegrityGuard(author_db, book_db)
        self._clock = clock

    async def create_author(
        self,
        name: str,
        email: str,
        date_of_birth: date,
    ) -> AuthorModel:
        """
        Create a new author.

        Args:
            name: Display name (2-200 characters)
            email: Email address, stored trimmed and lower-cased
            date_of_birth: Not in the future

        Returns:
            AuthorModel: Created author with store-assigned id

        Raises:
            ValidationError: If a field breaks a rule
            DuplicateKey: If another author already holds the email
        """
        validate_author_fields(
            self._clock().date(),
            name=name,
            email=email,
            date_of_birth=date_of_birth,
        )
        email = normalize_email(email)
        await self.guard.assert_email_available(email)

        try:
            author = await author_crud.create(
                self.author_db,
                name=name.strip(),
                email=email,
                date_of_birth=date_of_birth,
            )
            await self.author_db.commit()
        except SQLAlchemyError as e:
            await self.author_db.rollback()
            logger.error("Failed to create author", extra={"error": str(e), "email": email})
            raise

        logger.info("Author created", extra={"author_id": author.id, "email": email})
        return author

    async def update_author(
        self,
        author_id: int,
        name: str | None = None,
        email: str | None = None,
        date_of_birth: date | None = None,
    ) -> AuthorModel:
        """
        Apply a partial update; None means "leave unchanged".

        Args:
            author_id: Author to update
            name: New name
            email: New email (may equal the current one)
            date_of_birth: New date of birth

        Returns:
            AuthorModel: The updated author (unchanged if no field supplied)

        Raises:
            NotFound: If the author does not exist
            ValidationError: If a supplied field breaks a rule
            DuplicateKey: If a different author already holds the email
        """
        validate_author_fields(
            self._clock().date(),
            name=name,
            email=email,
            date_of_birth=date_of_birth,
        )
        author = await self.get_author(author_id)

        changes: dict = {}
        if name is not None:
            changes["name"] = name.strip()
        if email is not None:
            changes["email"] = normalize_email(email)
            await self.guard.assert_email_available(
                changes["email"],
                excluding_author_id=author_id,
            )
        if date_of_birth is not None:
            changes["date_of_birth"] = date_of_birth

        if not changes:
            return author

        try:
            author = await author_crud.update_by_id(self.author_db, author_id, **changes)
            await self.author_db.commit()
        except SQLAlchemyError as e:
            await self.author_db.rollback()
            logger.error(
                "Failed to update author",
                extra={"error": str(e), "author_id": author_id},
            )
            raise

        if author is None:
            raise NotFound("Author", author_id)

        logger.info(
            "Author updated",
            extra={"author_id": author_id, "fields": sorted(changes)},
        )
        return author

    async def delete_author(self, author_id: int) -> bool:
        """
        Delete an author that no book references.

        Args:
            author_id: Author to delete

        Returns:
            bool: True if deleted, False if the author did not exist

        Raises:
            DependencyConflict: If at least one book references the author
        """
        if not await author_crud.exists(self.author_db, author_id):
            return False

        await self.guard.assert_no_dependent_books(author_id)

        try:
            deleted = await author_crud.delete_by_id(self.author_db, author_id)
            await self.author_db.commit()
        except SQLAlchemyError as e:
            await self.author_db.rollback()
            logger.error(
                "Failed to delete author",
                extra={"error": str(e), "author_id": author_id},
            )
            raise

        if deleted:
            logger.info("Author deleted", extra={"author_id": author_id})
        return deleted

    async def get_author(self, author_id: int) -> AuthorModel:
        """
        Get author by ID.

        Raises:
            NotFound: If the author does not exist
        """
        author = await author_crud.get_by_id(self.author_db, author_id)
        if author is None:
            raise NotFound("Author", author_id)
        return author

    async def list_authors(
        self,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[AuthorModel]:
        return await author_crud.get_all(self.author_db, limit=limit, offset=offset)

    async def get_author_by_email(self, email: str) -> AuthorModel | None:
        return await author_crud.get_by_email(self.author_db, email)

    async def count_authors(self) -> int:
        return await author_crud.count(self.author_db)
