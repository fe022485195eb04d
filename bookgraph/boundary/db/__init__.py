"""
Record store boundary layer: ORM models, store accessors, and connection management.

Exports:
  - AuthorStoreBase, BookStoreBase, IntegerIdMixin, TimestampMixin: Model building blocks
  - get_author_engine(), get_book_engine(), get_author_db(), get_book_db(): Per-store connections
  - AuthorModel, BookModel: Store records
  - author_crud, book_crud: Store accessor singletons

Dependencies: sqlalchemy, bookgraph.configs
System role: Persistence adapter for the two independently owned stores.
"""

from bookgraph.boundary.db.base import (
    AuthorStoreBase,
    BookStoreBase,
    IntegerIdMixin,
    TimestampMixin,
    utc_now,
)
from bookgraph.boundary.db.connection import (
    dispose_engines,
    get_author_db,
    get_author_engine,
    get_book_db,
    get_book_engine,
    make_session_factory,
)
from bookgraph.boundary.db.models import AuthorModel, BookModel
from bookgraph.boundary.db.CRUD import (
    AuthorCRUD,
    BaseCRUD,
    BookCRUD,
    author_crud,
    book_crud,
    normalize_email,
)

__all__ = [
    # Base classes
    "AuthorStoreBase",
    "BookStoreBase",
    "IntegerIdMixin",
    "TimestampMixin",
    "utc_now",
    # Connection
    "dispose_engines",
    "get_author_db",
    "get_author_engine",
    "get_book_db",
    "get_book_engine",
    "make_session_factory",
    # Models
    "AuthorModel",
    "BookModel",
    # CRUD classes
    "BaseCRUD",
    "AuthorCRUD",
    "BookCRUD",
    # CRUD singletons
    "author_crud",
    "book_crud",
    "normalize_email",
]
