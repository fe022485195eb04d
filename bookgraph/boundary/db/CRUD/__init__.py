"""Store accessors (CRUD classes and their singletons)."""

from bookgraph.boundary.db.CRUD.base_crud import BaseCRUD
from bookgraph.boundary.db.CRUD.author_crud import AuthorCRUD, author_crud, normalize_email
from bookgraph.boundary.db.CRUD.book_crud import BookCRUD, book_crud

__all__ = [
    "BaseCRUD",
    "AuthorCRUD",
    "BookCRUD",
    "author_crud",
    "book_crud",
    "normalize_email",
]
