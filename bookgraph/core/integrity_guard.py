"""
Integrity guard for cross-store references.

The author and book stores share no foreign keys, so referential and
uniqueness rules are enforced here, in application code, before every
write that could break them:

- assert_author_exists: before a Book is created or re-pointed
- assert_no_dependent_books: before an Author is deleted
- assert_email_available: before an Author email is set

Each check is a read-then-decide against the store accessors. It is not
atomic with the write that follows: a concurrent request may invalidate
the result between the check and the write. That window is accepted; it
cannot corrupt either store, only leave a Book pointing at a deleted
Author, which the read path tolerates.

Dependencies: sqlalchemy, bookgraph.boundary.db.CRUD
System role: Write-path referential and uniqueness enforcement
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.CRUD.author_crud import author_crud, normalize_email
from bookgraph.boundary.db.CRUD.book_crud import book_crud
from bookgraph.core.exceptions import DependencyConflict, DuplicateKey, ReferenceNotFound

logger = logging.getLogger(__name__)


class IntegrityGuard:
    """Cross-store existence, dependency and uniqueness checks."""

    def __init__(self, author_db: AsyncSession, book_db: AsyncSession) -> None:
        """
        Initialize guard with one session per store.

        Args:
            author_db: Author store session
            book_db: Book store session
        """
        self.author_db = author_db
        self.book_db = book_db

    async def assert_author_exists(self, author_id: int, field: str = "author_id") -> None:
        """
        Fail unless an Author with author_id exists.

        Args:
            author_id: Referenced Author identifier
            field: Referencing field name reported in the error

        Raises:
            ReferenceNotFound: If no such Author exists
        """
        if not await author_crud.exists(self.author_db, author_id):
            logger.warning(
                "Rejected write: referenced author missing",
                extra={"author_id": author_id, "field": field},
            )
            raise ReferenceNotFound(field, author_id)

    async def assert_no_dependent_books(self, author_id: int) -> None:
        """
        Fail if any Book currently references the Author.

        Args:
            author_id: Author about to be deleted

        Raises:
            DependencyConflict: If at least one Book holds author_id
        """
        dependent_count = await book_crud.count_for_author(self.book_db, author_id)
        if dependent_count:
            logger.warning(
                "Rejected author deletion: dependent books",
                extra={"author_id": author_id, "dependent_count": dependent_count},
            )
            raise DependencyConflict(author_id, dependent_count)

    async def assert_email_available(
        self,
        email: str,
        excluding_author_id: int | None = None,
    ) -> None:
        """
        Fail if another Author already holds email (case-insensitive).

        Args:
            email: Candidate email
            excluding_author_id: Author being updated, allowed to keep its own email

        Raises:
            DuplicateKey: If a different Author holds the email
        """
        existing = await author_crud.get_by_email(self.author_db, email)
        if existing is not None and existing.id != excluding_author_id:
            logger.warning(
                "Rejected write: duplicate author email",
                extra={"existing_author_id": existing.id, "excluding_author_id": excluding_author_id},
            )
            raise DuplicateKey("email", normalize_email(email), existing.id)
