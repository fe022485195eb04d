"""
Per-request batch loader.

Collects identifier lookups made during one resolution pass and fetches
each distinct, not-yet-seen identifier set with a single store call. The
cache lives on the loader instance, and a loader is created per request,
so concurrent requests never share state (and may observe different
snapshots of the same store).

Dependencies: sqlalchemy, bookgraph.boundary.db.CRUD
System role: N+1 avoidance for cross-store relationship resolution
"""

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Generic, Hashable, Iterable, Mapping, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.boundary.db.CRUD.author_crud import author_crud
from bookgraph.boundary.db.CRUD.book_crud import book_crud
from bookgraph.boundary.db.models import AuthorModel, BookModel

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

BatchFn = Callable[[list[K]], Awaitable[Mapping[K, V]]]

_MISSING = object()


class BatchLoader(Generic[K, V]):
    """
    Deduplicating, caching loader over a batch fetch function.

    The batch function receives a list of distinct keys and returns a
    mapping containing the keys that exist. Keys it leaves out are cached
    as absent and are never an error.

    Attributes:
        name: Label used in logs
        dispatch_count: Number of times the batch function has been called
    """

    def __init__(self, batch_fn: BatchFn, name: str = "batch") -> None:
        """
        Initialize loader.

        Args:
            batch_fn: Async function fetching many keys in one store call
            name: Label used in logs
        """
        self._batch_fn = batch_fn
        self._cache: dict[K, object] = {}
        self.name = name
        self.dispatch_count = 0

    async def load_many(self, keys: Iterable[K]) -> dict[K, V]:
        """
        Resolve many keys with at most one batch call.

        Args:
            keys: Keys to resolve (duplicates allowed)

        Returns:
            dict: Exactly the distinct requested keys that exist
        """
        distinct = list(dict.fromkeys(keys))
        pending = [key for key in distinct if key not in self._cache]

        if pending:
            self.dispatch_count += 1
            fetched = await self._batch_fn(pending)
            for key in pending:
                self._cache[key] = fetched.get(key, _MISSING)
            logger.debug(
                "Batch dispatched",
                extra={
                    "loader": self.name,
                    "requested": len(distinct),
                    "fetched": len(pending),
                    "found": len(fetched),
                },
            )

        return {
            key: self._cache[key]
            for key in distinct
            if self._cache[key] is not _MISSING
        }

    async def load(self, key: K) -> V | None:
        """
        Resolve one key.

        Returns:
            The value, or None if the key does not exist
        """
        return (await self.load_many([key])).get(key)

    def prime(self, key: K, value: V) -> None:
        """Seed the cache with a value already in hand."""
        self._cache.setdefault(key, value)

    def clear(self, key: K | None = None) -> None:
        """Forget one key, or everything when key is None."""
        if key is None:
            self._cache.clear()
        else:
            self._cache.pop(key, None)


def author_loader(author_db: AsyncSession) -> BatchLoader[int, AuthorModel]:
    """
    Loader resolving Author ids with one author store query per batch.

    Args:
        author_db: Author store session for the current request
    """

    async def fetch(author_ids: list[int]) -> dict[int, AuthorModel]:
        authors = await author_crud.get_by_ids(author_db, author_ids)
        return {author.id: author for author in authors}

    return BatchLoader(fetch, name="authors_by_id")


def book_loader(book_db: AsyncSession) -> BatchLoader[int, BookModel]:
    """
    Loader resolving Book ids with one book store query per batch.

    Args:
        book_db: Book store session for the current request
    """

    async def fetch(book_ids: list[int]) -> dict[int, BookModel]:
        books = await book_crud.get_by_ids(book_db, book_ids)
        return {book.id: book for book in books}

    return BatchLoader(fetch, name="books_by_id")


def books_by_author_loader(book_db: AsyncSession) -> BatchLoader[int, list[BookModel]]:
    """
    Loader grouping Books by their author reference, one query per batch.

    Authors without books are absent from the result; callers treat that
    as an empty list. Books keep store iteration order within each group.

    Args:
        book_db: Book store session for the current request
    """

    async def fetch(author_ids: list[int]) -> dict[int, list[BookModel]]:
        grouped: dict[int, list[BookModel]] = defaultdict(list)
        for book in await book_crud.get_by_author_ids(book_db, author_ids):
            grouped[book.author_id].append(book)
        return grouped

    return BatchLoader(fetch, name="books_by_author_id")
