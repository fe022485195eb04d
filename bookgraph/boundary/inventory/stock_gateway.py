"""
Stock Gateway adapter.

Boundary to the external inventory service. Every operation degrades
silently: transport failures, timeouts, non-success statuses and malformed
payloads are logged and turned into "no data" (None, empty list, False).
Nothing here raises to the caller.

Dependencies: httpx, pydantic, bookgraph.configs
System role: External stock service access
"""

import logging
from typing import Protocol, runtime_checkable

import httpx

from bookgraph.configs.inventory import InventoryApiSettings
from bookgraph.models.inventory import InventoryRecord, StockUpdate

logger = logging.getLogger(__name__)

# RuntimeError covers requests on a closed client (and httpx.StreamError)
CALL_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, RuntimeError)

API_KEY_HEADER = "X-API-Key"


@runtime_checkable
class StockGateway(Protocol):
    """Read/write access to external stock levels."""

    async def get_inventory(self, book_id: int) -> InventoryRecord | None: ...

    async def list_low_stock(self) -> list[InventoryRecord]: ...

    async def set_stock(self, book_id: int, quantity: int) -> bool: ...

    async def aclose(self) -> None: ...


class NullStockGateway:
    """Gateway used when no inventory service is configured."""

    async def get_inventory(self, book_id: int) -> InventoryRecord | None:
        return None

    async def list_low_stock(self) -> list[InventoryRecord]:
        return []

    async def set_stock(self, book_id: int, quantity: int) -> bool:
        return False

    async def aclose(self) -> None:
        return None


class HttpStockGateway:
    """
    Inventory service client over httpx.

    Endpoints (relative to the configured base URL):
        GET inventory/books/{id}  -> InventoryRecord
        GET inventory/low-stock   -> list[InventoryRecord]
        PUT inventory/books/{id}  <- {"bookId", "quantity"}

    Attributes:
        settings: Inventory API settings in effect
    """

    def __init__(
        self,
        settings: InventoryApiSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            settings: Base URL, API key, timeout and retry configuration
            transport: Optional transport replacing the retrying HTTP
                transport (tests pass an httpx.MockTransport)
        """
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={API_KEY_HEADER: settings.api_key},
            timeout=settings.timeout_seconds,
            transport=transport or httpx.AsyncHTTPTransport(retries=settings.retry_count),
        )

        logger.info(
            "Initialized inventory gateway",
            extra={
                "base_url": settings.base_url,
                "timeout_seconds": settings.timeout_seconds,
                "retry_count": settings.retry_count,
            },
        )

    async def get_inventory(self, book_id: int) -> InventoryRecord | None:
        """
        Fetch stock for one book.

        Returns:
            InventoryRecord, or None when the book is unknown to the inventory
            service or the call fails
        """
        try:
            response = await self._client.get(f"inventory/books/{book_id}")
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
            return InventoryRecord.model_validate(response.json())
        except CALL_ERRORS as e:
            self._log_degraded("get_inventory", e, book_id=book_id)
            return None
        except ValueError as e:
            self._log_degraded("get_inventory", e, book_id=book_id)
            return None

    async def list_low_stock(self) -> list[InventoryRecord]:
        """
        Fetch every record the inventory service flags as low stock.

        Returns:
            list[InventoryRecord]: Empty when the call fails
        """
        try:
            response = await self._client.get("inventory/low-stock")
            response.raise_for_status()
            return [InventoryRecord.model_validate(item) for item in response.json()]
        except CALL_ERRORS as e:
            self._log_degraded("list_low_stock", e)
            return []
        except (TypeError, ValueError) as e:
            self._log_degraded("list_low_stock", e)
            return []

    async def set_stock(self, book_id: int, quantity: int) -> bool:
        """
        Set the stock level of one book.

        Returns:
            bool: True if the inventory service accepted the update
        """
        payload = StockUpdate(book_id=book_id, quantity=quantity).model_dump(by_alias=True)
        try:
            response = await self._client.put(f"inventory/books/{book_id}", json=payload)
            response.raise_for_status()
        except CALL_ERRORS as e:
            self._log_degraded("set_stock", e, book_id=book_id, quantity=quantity)
            return False

        logger.info(
            "Stock updated",
            extra={"book_id": book_id, "quantity": quantity},
        )
        return True

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def _log_degraded(self, operation: str, error: Exception, **context) -> None:
        if isinstance(error, httpx.HTTPStatusError):
            logger.warning(
                "Inventory service returned an error status",
                extra={
                    "operation": operation,
                    "status_code": error.response.status_code,
                    **context,
                },
            )
        elif isinstance(error, httpx.TimeoutException):
            logger.warning(
                "Inventory service timed out",
                extra={"operation": operation, **context},
            )
        else:
            logger.error(
                "Inventory service call failed",
                extra={
                    "operation": operation,
                    "error_type": type(error).__name__,
                    "error": str(error),
                    **context,
                },
            )


def build_stock_gateway(settings: InventoryApiSettings) -> StockGateway:
    """
    Build the gateway matching the configuration.

    Args:
        settings: Inventory API settings

    Returns:
        HttpStockGateway when a base URL is configured, NullStockGateway otherwise
    """
    if settings.enabled:
        return HttpStockGateway(settings)
    logger.info("Inventory API not configured; stock lookups disabled")
    return NullStockGateway()
