"""
Product Store Protocol

The persistence-side collaborator of the product cache. Querying,
validation and entity mapping live behind this protocol; the cache only
needs the operation shapes.

Every operation returns a ``Result``: business failures (not found,
validation errors) are reported through ``Result.failure`` rather than
raised.
"""

from typing import Protocol, runtime_checkable

from catalog_cache.products.models import (
    CreateProductRequest,
    PagedResult,
    ProductResponse,
    ProductSummary,
    Result,
    SearchCriteria,
    UpdateProductRequest,
)


@runtime_checkable
class ProductStore(Protocol):
    """
    Protocol for product persistence.

    CachedProductService implements the same protocol, so it can be used
    wherever a ProductStore is expected.
    """

    async def get_by_id(self, product_id: int) -> Result[ProductResponse]:
        """Look up one product. A missing product is a failure result."""
        ...

    async def search(self, criteria: SearchCriteria) -> Result[PagedResult[ProductSummary]]:
        """Return one filtered, sorted page of products."""
        ...

    async def create(self, request: CreateProductRequest) -> Result[ProductResponse]:
        ...

    async def update(
        self, product_id: int, request: UpdateProductRequest
    ) -> Result[ProductResponse]:
        ...

    async def delete(self, product_id: int) -> Result[bool]:
        ...

    async def seed(self, count: int) -> Result[int]:
        """Insert ``count`` generated products; data is the number inserted."""
        ...
