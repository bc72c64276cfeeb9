#!/usr/bin/env python3
"""
FastAPI Application Factory

Hosts the cache reporting endpoints next to the product API. The product
store is supplied by the host application; startup wraps it with the
read-through cache and publishes the result on ``app.state.product_cache``.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog_cache.application.api.routes.cache import router as cache_router
from catalog_cache.core.config.constants import HEADER_REQUEST_ID
from catalog_cache.core.config.settings import get_settings
from catalog_cache.core.exceptions import CatalogCacheError
from catalog_cache.core.interfaces.product_store import ProductStore
from catalog_cache.core.logging.logger import (
    clear_request_id,
    get_logger,
    set_request_id,
    setup_logging,
)
from catalog_cache.products.factory import build_product_cache

logger = get_logger(__name__)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup and shutdown).
    """
    settings = get_settings()

    setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

    logger.info(
        "Starting Product Catalog Cache",
        environment=settings.app.ENVIRONMENT,
        version=settings.app.APP_VERSION,
    )

    product_store: ProductStore | None = getattr(app.state, "product_store", None)
    if product_store is None:
        logger.warning("No product store configured, cache endpoints unavailable")
    else:
        app.state.product_cache = await build_product_cache(product_store, settings)
        logger.info("Product cache ready")

    try:
        yield
    finally:
        logger.info("Shutting down application")

        product_cache = getattr(app.state, "product_cache", None)
        if product_cache is not None:
            await product_cache.close()
            app.state.product_cache = None

        logger.info("Application shutdown complete")


# ============================================================================
# Application Factory
# ============================================================================


def create_app(product_store: ProductStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        product_store: Persistence layer to wrap with the cache

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Read-through cache for the product catalog",
        lifespan=lifespan,
    )
    app.state.product_store = product_store

    app.include_router(cache_router)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """
        Inject request ID into all requests for correlation.
        """
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response
        finally:
            clear_request_id()

    @app.exception_handler(CatalogCacheError)
    async def catalog_cache_exception_handler(request: Request, exc: CatalogCacheError):
        """Handle product cache exceptions."""
        logger.error(
            f"Catalog cache exception: {exc.message}",
            error_type=type(exc).__name__,
            request_id=exc.request_id,
        )
        return JSONResponse(
            status_code=500,
            content=exc.to_dict(),
            headers={HEADER_REQUEST_ID: exc.request_id or ""},
        )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "metrics": "/cache/metrics",
            "health": "/cache/health",
        }

    return app
