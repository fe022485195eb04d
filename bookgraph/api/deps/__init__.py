"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_author_service,
    get_book_service,
    get_bulk_service,
    get_relationship_resolver,
    get_service_cache,
    get_settings_dependency,
    get_stock_gateway,
)

__all__ = [
    "get_author_service",
    "get_book_service",
    "get_bulk_service",
    "get_relationship_resolver",
    "get_service_cache",
    "get_settings_dependency",
    "get_stock_gateway",
]
