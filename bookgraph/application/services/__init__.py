"""Service orchestrators."""

from .author_service import AuthorService
from .book_service import BookService
from .bulk_service import BulkItemResult, BulkService

__all__ = [
    "AuthorService",
    "BookService",
    "BulkItemResult",
    "BulkService",
]
