"""
Product Domain Models

Pydantic models shared by the product store and the read-through cache:
search criteria, product DTOs, the paged result envelope and the
operation ``Result`` wrapper.

Cached entries are the JSON form of these models (``model_dump(mode="json")``),
so any field added here changes the cached shape too.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog_cache.core.config.constants import PRICE_BOUND_QUANTUM

T = TypeVar("T")


# ============================================================================
# Search Criteria
# ============================================================================


class SearchCriteria(BaseModel):
    """
    Filtering, sorting and paging parameters of a product search.

    Every field participates in the cache key of the resulting page.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, description="1-based page number")
    page_size: int = Field(default=20, description="Items per page")
    search_term: str | None = Field(default=None, description="Free-text filter on name/description")
    category: str | None = Field(default=None, description="Exact category filter")
    brand: str | None = Field(default=None, description="Exact brand filter")
    min_price: Decimal | None = Field(default=None, description="Inclusive lower price bound")
    max_price: Decimal | None = Field(default=None, description="Inclusive upper price bound")
    sort_by: str | None = Field(default=None, description="Sort column (name, price, created_at, ...)")
    descending: bool = Field(default=False, description="Sort direction")

    @field_validator("min_price", "max_price")
    @classmethod
    def round_price_bound(cls, v):
        """Round price bounds to cents; the store filters on the same value the key renders."""
        if v is None:
            return v
        return v.quantize(PRICE_BOUND_QUANTUM, rounding=ROUND_HALF_UP)


# ============================================================================
# Product DTOs
# ============================================================================


class ProductResponse(BaseModel):
    """Full product representation returned by a by-id lookup."""

    id: int
    name: str
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    price: Decimal
    stock_quantity: int = 0
    sku: str | None = None
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductSummary(BaseModel):
    """Compact product row used in search pages."""

    id: int
    name: str
    category: str | None = None
    brand: str | None = None
    price: Decimal
    stock_quantity: int = 0


class CreateProductRequest(BaseModel):
    name: str
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    price: Decimal
    stock_quantity: int = 0
    sku: str | None = None
    colors: list[str] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    """Partial update; ``None`` leaves the stored value unchanged."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    price: Decimal | None = None
    stock_quantity: int | None = None
    sku: str | None = None
    colors: list[str] | None = None
    sizes: list[str] | None = None


class PagedResult(BaseModel, Generic[T]):
    """One page of a search plus the paging totals."""

    items: list[T] = Field(default_factory=list)
    page: int = 1
    page_size: int = 20
    total_count: int = 0
    total_pages: int = 0


# ============================================================================
# Operation Result
# ============================================================================


class Result(BaseModel, Generic[T]):
    """
    Outcome of a product store operation.

    A successful result carries ``data`` (which may still be ``None``, e.g.
    a lookup that found nothing); a failed result carries ``error_message``
    and optionally a list of ``errors``.

    Usage:
        Result.success(product)
        Result.failure("Product not found")
        Result.failure(["name is required", "price must be positive"])
    """

    is_success: bool
    data: T | None = None
    error_message: str | None = None
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def success(cls, data: T | None = None) -> "Result[T]":
        return cls(is_success=True, data=data)

    @classmethod
    def failure(cls, error: str | list[str]) -> "Result[T]":
        if isinstance(error, list):
            return cls(
                is_success=False,
                error_message="; ".join(error) if error else None,
                errors=list(error),
            )
        return cls(is_success=False, error_message=error, errors=[error])
