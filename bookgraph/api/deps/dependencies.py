"""
Dependency injection container.

Factory functions for FastAPI dependencies. Each request gets one session
per store plus its own services and resolver; the stock gateway is shared
through the service cache.

Dependencies: fastapi, sqlalchemy, bookgraph.configs, bookgraph.application,
bookgraph.boundary, bookgraph.core
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookgraph.application.services import AuthorService, BookService, BulkService
from bookgraph.boundary.db import get_author_db, get_book_db
from bookgraph.boundary.inventory import StockGateway, build_stock_gateway
from bookgraph.configs import Settings, get_settings
from bookgraph.core.relationship_resolver import RelationshipResolver


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._stock_gateway: StockGateway | None = None

    @property
    def stock_gateway(self) -> StockGateway:
        """Get cached stock gateway."""
        if self._stock_gateway is None:
            self._stock_gateway = build_stock_gateway(get_settings().inventory_api)
        return self._stock_gateway

    async def aclose(self) -> None:
        """Close and forget all cached instances."""
        if self._stock_gateway is not None:
            await self._stock_gateway.aclose()
        self._stock_gateway = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_stock_gateway() -> StockGateway:
    """Get the shared stock gateway."""
    return get_service_cache().stock_gateway


def get_relationship_resolver(
    author_db: AsyncSession = Depends(get_author_db),
    book_db: AsyncSession = Depends(get_book_db),
    stock_gateway: StockGateway = Depends(get_stock_gateway),
    settings: Settings = Depends(get_settings_dependency),
) -> RelationshipResolver:
    """
    Get a request-scoped relationship resolver.

    Args:
        author_db: Author store session (injected via Depends)
        book_db: Book store session (injected via Depends)
        stock_gateway: Shared stock gateway
        settings: Application settings

    Returns:
        RelationshipResolver: Resolver with fresh batch loaders
    """
    return RelationshipResolver(
        author_db=author_db,
        book_db=book_db,
        stock_gateway=stock_gateway,
        currency_symbol=settings.currency_symbol,
    )


def get_author_service(
    author_db: AsyncSession = Depends(get_author_db),
    book_db: AsyncSession = Depends(get_book_db),
) -> AuthorService:
    """
    Get author service instance.

    Args:
        author_db: Author store session (injected via Depends)
        book_db: Book store session (injected via Depends)

    Returns:
        AuthorService: Author service instance
    """
    return AuthorService(author_db=author_db, book_db=book_db)


def get_book_service(
    author_db: AsyncSession = Depends(get_author_db),
    book_db: AsyncSession = Depends(get_book_db),
    stock_gateway: StockGateway = Depends(get_stock_gateway),
) -> BookService:
    """
    Get book service instance.

    Args:
        author_db: Author store session (injected via Depends)
        book_db: Book store session (injected via Depends)
        stock_gateway: Shared stock gateway

    Returns:
        BookService: Book service instance
    """
    return BookService(author_db=author_db, book_db=book_db, stock_gateway=stock_gateway)


def get_bulk_service(
    author_service: AuthorService = Depends(get_author_service),
    book_service: BookService = Depends(get_book_service),
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> BulkService:
    """
    Get bulk service instance.

    The composed services and resolver share the request's store sessions.

    Returns:
        BulkService: Bulk service instance
    """
    return BulkService(
        author_service=author_service,
        book_service=book_service,
        resolver=resolver,
    )
