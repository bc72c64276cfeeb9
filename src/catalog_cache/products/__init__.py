"""
Products Module

Product domain models and the read-through cache decorator around the
product store.

Import the decorator and the wiring helpers from their own modules:

    from catalog_cache.products.cached_product_service import CachedProductService
    from catalog_cache.products.factory import build_product_cache
"""

from catalog_cache.products.models import (
    CreateProductRequest,
    PagedResult,
    ProductResponse,
    ProductSummary,
    Result,
    SearchCriteria,
    UpdateProductRequest,
)

__all__ = [
    "CreateProductRequest",
    "PagedResult",
    "ProductResponse",
    "ProductSummary",
    "Result",
    "SearchCriteria",
    "UpdateProductRequest",
]
