"""
FastAPI Dependencies

Reusable dependencies giving route handlers access to the singletons
created during application startup.

The product cache lives on ``app.state.product_cache``; it is created once
in the lifespan manager and shared by every request.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from catalog_cache.products.cached_product_service import CachedProductService


def get_product_cache(request: Request) -> CachedProductService:
    """
    Retrieve the CachedProductService from application state.

    Raises:
        HTTPException: 503 if startup has not created the product cache
    """
    product_cache = getattr(request.app.state, "product_cache", None)
    if product_cache is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Product cache not initialized",
        )
    return product_cache


ProductCacheDep = Annotated[CachedProductService, Depends(get_product_cache)]
