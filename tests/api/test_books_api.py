"""
Test suite for the book and statistics endpoints.

System role: Verification of book HTTP mapping and error codes
"""

from decimal import Decimal

from bookgraph.application.services import BulkItemResult
from bookgraph.core.exceptions import NotFound, ReferenceNotFound, ValidationError
from bookgraph.core.relationship_resolver import CatalogStatistics, LowStockBook
from bookgraph.models.inventory import InventoryRecord
from factories import author, book, resolved_book


def test_list_books_should_resolve_authors_in_one_call(
    client, mock_book_service, resolver_double
) -> None:
    ann = author()
    books = [book(1), book(2, author_id=99)]
    mock_book_service.list_books.return_value = books
    resolver_double.resolve_books.return_value = [
        resolved_book(books[0], ann),
        resolved_book(books[1], None),
    ]

    response = client.get("/api/v1/books")

    assert response.status_code == 200
    data = response.json()
    assert data[0]["author_name"] == "A. Writer"
    assert data[0]["formatted_price"] == "$10.00"
    assert data[1]["author_name"] is None
    assert data[1]["has_valid_author"] is False
    resolver_double.resolve_books.assert_awaited_once_with(books)


def test_create_book(client, mock_book_service, resolver_double) -> None:
    created = book()
    mock_book_service.create_book.return_value = created
    resolver_double.resolve_book.return_value = resolved_book(created, author())

    response = client.post(
        "/api/v1/books",
        json={"title": "T", "author_id": 1, "price": "10.00"},
    )

    assert response.status_code == 201
    assert response.json()["is_available"] is True
    kwargs = mock_book_service.create_book.await_args.kwargs
    assert kwargs["price"] == Decimal("10.00")
    assert kwargs["description"] == ""
    assert kwargs["published_date"] is None


def test_create_book_unknown_author_should_return_422(client, mock_book_service) -> None:
    mock_book_service.create_book.side_effect = ReferenceNotFound("author_id", 99)

    response = client.post(
        "/api/v1/books",
        json={"title": "T", "author_id": 99, "price": "10.00"},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "reference_not_found"
    assert detail["details"]["field"] == "author_id"
    assert detail["details"]["reference_id"] == 99


def test_create_book_negative_price_should_return_400(client, mock_book_service) -> None:
    mock_book_service.create_book.side_effect = ValidationError(
        "Price cannot be negative", field="price", rule="non_negative"
    )

    response = client.post(
        "/api/v1/books",
        json={"title": "T", "author_id": 1, "price": "-1"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["details"]["rule"] == "non_negative"


def test_get_missing_book_should_return_404(client, mock_book_service) -> None:
    mock_book_service.get_book.side_effect = NotFound("Book", 5)

    response = client.get("/api/v1/books/5")

    assert response.status_code == 404
    assert response.json()["detail"]["message"] == "Book 5 does not exist"


def test_patch_book(client, mock_book_service, resolver_double) -> None:
    updated = book(price=Decimal("12.00"))
    mock_book_service.update_book.return_value = updated
    resolver_double.resolve_book.return_value = resolved_book(updated, author())

    response = client.patch("/api/v1/books/1", json={"price": "12.00"})

    assert response.status_code == 200
    mock_book_service.update_book.assert_awaited_once_with(
        book_id=1,
        title=None,
        description=None,
        price=Decimal("12.00"),
        is_available=None,
        author_id=None,
    )


def test_delete_book(client, mock_book_service) -> None:
    mock_book_service.delete_book.return_value = True

    assert client.delete("/api/v1/books/1").status_code == 204


def test_delete_missing_book_should_return_404(client, mock_book_service) -> None:
    mock_book_service.delete_book.return_value = False

    assert client.delete("/api/v1/books/1").status_code == 404


def test_search_books(client, mock_book_service, resolver_double) -> None:
    mock_book_service.search_books.return_value = []
    resolver_double.resolve_books.return_value = []

    response = client.get("/api/v1/books/search", params={"term": "sea"})

    assert response.status_code == 200
    mock_book_service.search_books.assert_awaited_once_with("sea")


def test_reprice_books(client, mock_bulk_service) -> None:
    mock_bulk_service.reprice_books.return_value = [
        BulkItemResult(item_id=1, succeeded=True),
        BulkItemResult(
            item_id=2,
            succeeded=False,
            error_code="validation_error",
            error_message="Price cannot be negative",
        ),
    ]

    response = client.post("/api/v1/books/reprice", json={"percentage_change": "-10"})

    assert response.status_code == 200
    assert response.json()["failed"] == 1
    mock_bulk_service.reprice_books.assert_awaited_once_with(Decimal("-10"))


def test_toggle_availability(client, mock_book_service, resolver_double) -> None:
    toggled = book(is_available=False)
    mock_book_service.toggle_availability.return_value = toggled
    resolver_double.resolve_book.return_value = resolved_book(toggled, author())

    response = client.post("/api/v1/books/1/toggle-availability")

    assert response.status_code == 200
    assert response.json()["is_available"] is False


def test_book_inventory(client, mock_book_service, resolver_double) -> None:
    mock_book_service.get_book.return_value = book()
    resolver_double.inventory_for_book.return_value = InventoryRecord(book_id=1, quantity=4)

    response = client.get("/api/v1/books/1/inventory")

    assert response.status_code == 200
    assert response.json()["quantity"] == 4


def test_book_inventory_unavailable_should_return_null(
    client, mock_book_service, resolver_double
) -> None:
    mock_book_service.get_book.return_value = book()
    resolver_double.inventory_for_book.return_value = None

    response = client.get("/api/v1/books/1/inventory")

    assert response.status_code == 200
    assert response.json() is None


def test_update_stock(client, mock_book_service) -> None:
    mock_book_service.get_book.return_value = book()
    mock_book_service.update_stock.return_value = False

    response = client.put("/api/v1/books/1/stock", json={"quantity": 3})

    assert response.status_code == 200
    assert response.json() == {"book_id": 1, "quantity": 3, "updated": False}


def test_low_stock_books(client, resolver_double) -> None:
    resolver_double.low_stock_books.return_value = [
        LowStockBook(book=book(7, title="Rare"), inventory=InventoryRecord(book_id=7, quantity=1))
    ]

    response = client.get("/api/v1/books/low-stock")

    assert response.status_code == 200
    assert response.json()[0]["title"] == "Rare"
    assert response.json()[0]["quantity"] == 1


def test_statistics(client, resolver_double) -> None:
    resolver_double.catalog_statistics.return_value = CatalogStatistics(
        total_books=2,
        total_authors=1,
        average_price=Decimal("12.50"),
        most_expensive_book=book(2, price=Decimal("15.00")),
        newest_book=book(1),
    )

    response = client.get("/api/v1/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["total_books"] == 2
    assert data["most_expensive_book"]["id"] == 2
    assert data["newest_book"]["id"] == 1


def test_unexpected_error_should_return_500(client, mock_book_service) -> None:
    mock_book_service.list_books.side_effect = RuntimeError("boom")

    response = client.get("/api/v1/books")

    assert response.status_code == 500
    assert response.json()["detail"]["error"] == "internal_error"
