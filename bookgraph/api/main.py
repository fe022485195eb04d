"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, bookgraph.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookgraph import __version__
from bookgraph.api.deps.dependencies import get_service_cache
from bookgraph.boundary.db import dispose_engines, get_author_engine, get_book_engine
from bookgraph.boundary.db.create_tables import create_store_tables
from bookgraph.configs import get_settings
from bookgraph.observability.logger import configure_logging
from bookgraph.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    authors_router,
    books_router,
    health_router,
    stats_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")
    settings = get_settings()

    # Startup
    if settings.create_tables_on_startup:
        logger.info("Creating store tables...")
        await create_store_tables(get_author_engine(), get_book_engine())

    cache = get_service_cache()
    _ = cache.stock_gateway
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.aclose()
    await dispose_engines()
    logger.info("Service cache cleared, store engines disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="Book Graph API",
        description="Books and authors resolved across two independent record stores",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(authors_router, prefix="/api/v1")
    app.include_router(books_router, prefix="/api/v1")
    app.include_router(stats_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "bookgraph.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
