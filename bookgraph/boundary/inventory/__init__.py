"""External inventory service boundary."""

from .stock_gateway import (
    HttpStockGateway,
    NullStockGateway,
    StockGateway,
    build_stock_gateway,
)

__all__ = [
    "HttpStockGateway",
    "NullStockGateway",
    "StockGateway",
    "build_stock_gateway",
]
