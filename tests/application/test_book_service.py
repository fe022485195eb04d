"""
Test suite for BookService.

Tests validated book commands: reference checks on create and re-point,
partial updates, availability toggling and stock updates.

System role: Verification of book use cases
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from bookgraph.application.services import BookService
from bookgraph.core.exceptions import NotFound, ReferenceNotFound, ValidationError


class TestCreateBook:
    """Test suite for BookService.create_book()."""

    @pytest.mark.asyncio
    async def test_should_create_with_defaults(self, book_service, writer) -> None:
        book = await book_service.create_book(title="T", author_id=writer.id, price=Decimal("10"))

        assert book.id == 1
        assert book.price == Decimal("10.00")
        assert book.description == ""
        assert book.is_available is True
        assert book.published_date is not None

    @pytest.mark.asyncio
    async def test_should_keep_given_published_date(self, book_service, writer) -> None:
        published = datetime(2001, 9, 9, tzinfo=timezone.utc)

        book = await book_service.create_book(
            title="T", author_id=writer.id, price=Decimal("1"), published_date=published
        )

        assert book.published_date.year == 2001

    @pytest.mark.asyncio
    async def test_unknown_author_should_raise_and_leave_store_unchanged(
        self, book_service, writer, make_book
    ) -> None:
        """Test creating a book for a missing author never writes."""
        # Arrange
        await make_book(writer.id)
        count_before = await book_service.count_books()

        # Act
        with pytest.raises(ReferenceNotFound) as exc_info:
            await book_service.create_book(title="Orphan", author_id=999, price=Decimal("5"))

        # Assert
        assert exc_info.value.details["field"] == "author_id"
        assert await book_service.count_books() == count_before

    @pytest.mark.parametrize("missing_author_id", [0, 2, 10_000])
    @pytest.mark.asyncio
    async def test_any_unknown_author_should_be_rejected(
        self, book_service, writer, missing_author_id
    ) -> None:
        with pytest.raises(ReferenceNotFound):
            await book_service.create_book(
                title="Orphan", author_id=missing_author_id, price=Decimal("5")
            )

        assert await book_service.count_books() == 0

    @pytest.mark.asyncio
    async def test_negative_price_should_fail_validation(self, book_service, writer) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await book_service.create_book(title="T", author_id=writer.id, price=Decimal("-1"))

        assert exc_info.value.field == "price"
        assert await book_service.count_books() == 0


class TestUpdateBook:
    """Test suite for BookService.update_book()."""

    @pytest.mark.asyncio
    async def test_price_only_update_should_leave_other_fields(
        self, book_service, writer
    ) -> None:
        """Test partial update semantics and updated_at advance."""
        # Arrange
        book = await book_service.create_book(
            title="Original",
            author_id=writer.id,
            price=Decimal("10.00"),
            description="Kept",
            is_available=False,
        )
        updated_before = book.updated_at

        # Act
        updated = await book_service.update_book(book.id, price=Decimal("12.00"))

        # Assert
        assert updated.price == Decimal("12.00")
        assert updated.title == "Original"
        assert updated.description == "Kept"
        assert updated.is_available is False
        assert updated.updated_at > updated_before

    @pytest.mark.asyncio
    async def test_repoint_to_missing_author_should_fail(
        self, book_service, writer, make_book
    ) -> None:
        book = await make_book(writer.id)

        with pytest.raises(ReferenceNotFound):
            await book_service.update_book(book.id, author_id=999)

        assert (await book_service.get_book(book.id)).author_id == writer.id

    @pytest.mark.asyncio
    async def test_repoint_to_existing_author(
        self, book_service, author_service, writer, make_book
    ) -> None:
        other = await author_service.create_author(
            name="Other", email="o@x.com", date_of_birth=date(1990, 1, 1)
        )
        book = await make_book(writer.id)

        updated = await book_service.update_book(book.id, author_id=other.id)

        assert updated.author_id == other.id

    @pytest.mark.asyncio
    async def test_without_fields_should_return_book_unchanged(
        self, book_service, writer, make_book
    ) -> None:
        book = await make_book(writer.id)

        assert (await book_service.update_book(book.id)).updated_at == book.updated_at

    @pytest.mark.asyncio
    async def test_missing_book_should_raise_not_found(self, book_service) -> None:
        with pytest.raises(NotFound):
            await book_service.update_book(42, title="Ghost")

    @pytest.mark.asyncio
    async def test_blank_title_should_fail_validation(
        self, book_service, writer, make_book
    ) -> None:
        book = await make_book(writer.id)

        with pytest.raises(ValidationError) as exc_info:
            await book_service.update_book(book.id, title="  ")

        assert exc_info.value.rule == "required"


class TestOtherBookCommands:
    """Test suite for delete, toggle and stock commands."""

    @pytest.mark.asyncio
    async def test_delete_book(self, book_service, writer, make_book) -> None:
        book = await make_book(writer.id)

        assert await book_service.delete_book(book.id) is True
        assert await book_service.delete_book(book.id) is False

    @pytest.mark.asyncio
    async def test_toggle_availability_should_flip_flag(
        self, book_service, writer, make_book
    ) -> None:
        book = await make_book(writer.id)

        assert (await book_service.toggle_availability(book.id)).is_available is False
        assert (await book_service.toggle_availability(book.id)).is_available is True

    @pytest.mark.asyncio
    async def test_update_stock_should_delegate_to_gateway(
        self, author_db, book_db, writer, make_book
    ) -> None:
        gateway = AsyncMock()
        gateway.set_stock.return_value = True
        service = BookService(author_db=author_db, book_db=book_db, stock_gateway=gateway)
        book = await make_book(writer.id)

        assert await service.update_stock(book.id, 7) is True
        gateway.set_stock.assert_awaited_once_with(book.id, 7)

    @pytest.mark.asyncio
    async def test_update_stock_for_missing_book_should_skip_gateway(
        self, author_db, book_db
    ) -> None:
        gateway = AsyncMock()
        service = BookService(author_db=author_db, book_db=book_db, stock_gateway=gateway)

        assert await service.update_stock(42, 7) is False
        gateway.set_stock.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_stock_without_gateway_should_return_false(
        self, book_service, writer, make_book
    ) -> None:
        book = await make_book(writer.id)

        assert await book_service.update_stock(book.id, 3) is False

    @pytest.mark.asyncio
    async def test_negative_stock_should_fail_validation(self, book_service) -> None:
        with pytest.raises(ValidationError):
            await book_service.update_stock(1, -1)


class TestBookQueries:
    """Test suite for book reads."""

    @pytest.mark.asyncio
    async def test_queries(self, book_service, writer, make_book) -> None:
        await make_book(writer.id, title="Sea Stories")
        await make_book(writer.id, title="Land", is_available=False)

        assert [b.title for b in await book_service.books_by_author(writer.id)] == [
            "Sea Stories",
            "Land",
        ]
        assert [b.title for b in await book_service.available_books()] == ["Sea Stories"]
        assert [b.title for b in await book_service.search_books("sea")] == ["Sea Stories"]
        assert await book_service.search_books("   ") == []
        assert len(await book_service.list_books(limit=1)) == 1
