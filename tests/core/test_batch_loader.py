"""
Test suite for BatchLoader.

Tests deduplication, caching, absent keys, priming and the concrete
store-backed loaders.

System role: Verification of per-request batching
"""

from datetime import date
from decimal import Decimal

import pytest

from bookgraph.boundary.db.CRUD.author_crud import author_crud
from bookgraph.boundary.db.CRUD.book_crud import book_crud
from bookgraph.core.batch_loader import BatchLoader, author_loader, books_by_author_loader


def recording_loader(data: dict):
    calls: list[list] = []

    async def fetch(keys):
        calls.append(list(keys))
        return {key: data[key] for key in keys if key in data}

    return BatchLoader(fetch, name="test"), calls


class TestBatchLoader:
    """Test suite for the generic loader."""

    @pytest.mark.asyncio
    async def test_load_many_should_fetch_distinct_keys_once(self) -> None:
        """Test duplicate keys collapse into one batch call."""
        # Arrange
        loader, calls = recording_loader({1: "a", 2: "b"})

        # Act
        result = await loader.load_many([1, 2, 1, 2, 1])

        # Assert
        assert result == {1: "a", 2: "b"}
        assert calls == [[1, 2]]
        assert loader.dispatch_count == 1

    @pytest.mark.asyncio
    async def test_load_many_should_omit_missing_keys(self) -> None:
        """Test absent keys are not an error."""
        loader, _ = recording_loader({1: "a"})

        result = await loader.load_many([1, 404])

        assert result == {1: "a"}

    @pytest.mark.asyncio
    async def test_cached_keys_should_not_be_refetched(self) -> None:
        """Test found and absent keys are both cached."""
        loader, calls = recording_loader({1: "a", 2: "b"})
        await loader.load_many([1, 404])

        result = await loader.load_many([1, 2, 404])

        assert result == {1: "a", 2: "b"}
        assert calls == [[1, 404], [2]]

    @pytest.mark.asyncio
    async def test_fully_cached_request_should_not_dispatch(self) -> None:
        loader, calls = recording_loader({1: "a"})
        await loader.load(1)

        assert await loader.load(1) == "a"
        assert loader.dispatch_count == 1

    @pytest.mark.asyncio
    async def test_load_should_return_none_for_missing_key(self) -> None:
        loader, _ = recording_loader({})

        assert await loader.load(7) is None

    @pytest.mark.asyncio
    async def test_prime_should_seed_cache(self) -> None:
        """Test primed values are served without a batch call."""
        loader, calls = recording_loader({})
        loader.prime(5, "primed")

        assert await loader.load(5) == "primed"
        assert calls == []

    @pytest.mark.asyncio
    async def test_clear_should_force_refetch(self) -> None:
        loader, calls = recording_loader({1: "a"})
        await loader.load(1)

        loader.clear()
        await loader.load(1)

        assert calls == [[1], [1]]

    @pytest.mark.asyncio
    async def test_separate_loaders_should_not_share_cache(self) -> None:
        """Test cache lifetime is one loader instance."""
        first, first_calls = recording_loader({1: "a"})
        second, second_calls = recording_loader({1: "a"})

        await first.load(1)
        await second.load(1)

        assert first_calls == [[1]]
        assert second_calls == [[1]]


class TestStoreLoaders:
    """Test suite for the author and books-by-author loaders."""

    @pytest.mark.asyncio
    async def test_author_loader_should_key_by_id(self, author_db) -> None:
        author = await author_crud.create(
            author_db, name="Ann", email="ann@x.com", date_of_birth=date(1980, 1, 1)
        )

        loader = author_loader(author_db)
        found = await loader.load_many([author.id, author.id + 1])

        assert list(found) == [author.id]
        assert found[author.id].name == "Ann"

    @pytest.mark.asyncio
    async def test_books_by_author_loader_should_group_in_store_order(self, book_db) -> None:
        """Test grouping by author and absence of authors without books."""
        for title, author_id in [("A1", 1), ("B1", 2), ("A2", 1)]:
            await book_crud.create(book_db, title=title, author_id=author_id, price=Decimal("1"))

        loader = books_by_author_loader(book_db)
        grouped = await loader.load_many([1, 2, 3])

        assert [book.title for book in grouped[1]] == ["A1", "A2"]
        assert [book.title for book in grouped[2]] == ["B1"]
        assert 3 not in grouped
        assert loader.dispatch_count == 1
