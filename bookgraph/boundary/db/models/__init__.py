"""ORM models, one module per record store."""

from bookgraph.boundary.db.models.author_model import AuthorModel
from bookgraph.boundary.db.models.book_model import BookModel

__all__ = ["AuthorModel", "BookModel"]
