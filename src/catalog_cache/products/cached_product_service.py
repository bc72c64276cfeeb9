"""
Cached Product Service

Read-through cache decorator around a ProductStore.

Reads (cache-aside):
    key -> cache GET -> hit: record hit, return cached value
                     -> miss: record miss, call the store, cache a
                        successful non-empty result with its TTL
    Search pages are also registered in the tracking set
    ``product:paged:index`` when they are populated.

Writes:
    store first; only on success
    - update/delete drop ``product:by-id:{id}``
    - create/update/delete/seed drop every tracked search page

Every cache call is guarded: a store that raises degrades to a miss or a
no-op with a warning, and the store's result is returned unchanged.
Business failures from the store are never cached and trigger no
invalidation.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from catalog_cache.core.config.constants import CACHE_DEFAULT_TTL, Stage
from catalog_cache.core.config.settings import Settings
from catalog_cache.core.interfaces.cache import CacheStore, ModelT
from catalog_cache.core.interfaces.product_store import ProductStore
from catalog_cache.core.logging.logger import get_logger, log_stage
from catalog_cache.infrastructure.cache.keys import ProductCacheKeys
from catalog_cache.infrastructure.monitoring.cache_metrics import (
    CacheMetricsRecorder,
    MetricsSnapshot,
)
from catalog_cache.products.models import (
    CreateProductRequest,
    PagedResult,
    ProductResponse,
    ProductSummary,
    Result,
    SearchCriteria,
    UpdateProductRequest,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheOptions:
    """
    Cache policy of the decorator.

    Attributes:
        enabled: When False every call goes straight to the store
        default_ttl: TTL in seconds for any entry without an override
        by_id_ttl: TTL override for by-id entries
        paged_ttl: TTL override for search pages
    """
    enabled: bool = True
    default_ttl: int = CACHE_DEFAULT_TTL
    by_id_ttl: int | None = None
    paged_ttl: int | None = None

    @property
    def by_id_ttl_seconds(self) -> int:
        return self.by_id_ttl or self.default_ttl

    @property
    def paged_ttl_seconds(self) -> int:
        return self.paged_ttl or self.default_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheOptions":
        cache_settings = settings.cache
        return cls(
            enabled=cache_settings.ENABLE_CACHING,
            default_ttl=cache_settings.CACHE_DEFAULT_TTL,
            by_id_ttl=cache_settings.CACHE_PRODUCT_DETAIL_TTL,
            paged_ttl=cache_settings.CACHE_PRODUCT_SEARCH_TTL,
        )


class CachedProductService:
    """
    ProductStore decorator adding a read-through cache.

    Drop-in replacement for the wrapped store: same operations, same
    results.

    Usage:
        service = CachedProductService(
            inner=sql_product_store,
            cache_store=await create_cache_store(settings),
            metrics=get_cache_metrics(),
            options=CacheOptions.from_settings(settings),
        )
        result = await service.get_by_id(5)
    """

    def __init__(
        self,
        inner: ProductStore,
        cache_store: CacheStore,
        metrics: CacheMetricsRecorder,
        options: CacheOptions | None = None,
    ):
        self._inner = inner
        self._cache = cache_store
        self._metrics = metrics
        self._options = options or CacheOptions()

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def cache_store(self) -> CacheStore:
        return self._cache

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_by_id(self, product_id: int) -> Result[ProductResponse]:
        """
        Look up one product, serving from cache when possible.

        STAGE-PC.1: By-id lookup
        """
        if not self._options.enabled:
            return await self._inner.get_by_id(product_id)

        key = ProductCacheKeys.by_id(product_id)
        cached = await self._cache_get(key, ProductResponse)
        if cached is not None:
            self._metrics.record_hit(key)
            log_stage(logger, Stage.PRODUCT_BY_ID_LOOKUP, "Product cache hit", level="debug", key=key)
            return Result[ProductResponse].success(cached)

        self._metrics.record_miss(key)
        log_stage(logger, Stage.PRODUCT_BY_ID_LOOKUP, "Product cache miss", level="debug", key=key)

        result = await self._inner.get_by_id(product_id)
        if result.is_success and result.data is not None:
            await self._cache_set(key, result.data, self._options.by_id_ttl_seconds)
        return result

    async def search(self, criteria: SearchCriteria) -> Result[PagedResult[ProductSummary]]:
        """
        Run a product search, serving the page from cache when possible.

        STAGE-PC.2: Search lookup

        A freshly cached page is registered in the tracking set so that
        writes can find and drop it. Hits never touch the set.
        """
        if not self._options.enabled:
            return await self._inner.search(criteria)

        key = ProductCacheKeys.paged(criteria)
        cached = await self._cache_get(key, PagedResult[ProductSummary])
        if cached is not None:
            self._metrics.record_hit(key)
            log_stage(logger, Stage.PRODUCT_SEARCH_LOOKUP, "Search cache hit", level="debug", key=key)
            return Result[PagedResult[ProductSummary]].success(cached)

        self._metrics.record_miss(key)
        log_stage(
            logger, Stage.PRODUCT_SEARCH_LOOKUP, "Search cache miss",
            level="debug", key=key, page=criteria.page, page_size=criteria.page_size,
        )

        result = await self._inner.search(criteria)
        if result.is_success and result.data is not None:
            await self._cache_set(key, result.data, self._options.paged_ttl_seconds)
            await self._track_search_key(key)
        return result

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, request: CreateProductRequest) -> Result[ProductResponse]:
        result = await self._inner.create(request)
        if self._options.enabled and result.is_success:
            await self._invalidate_search_pages()
        return result

    async def update(
        self, product_id: int, request: UpdateProductRequest
    ) -> Result[ProductResponse]:
        result = await self._inner.update(product_id, request)
        if self._options.enabled and result.is_success:
            await self._invalidate_product(product_id)
            await self._invalidate_search_pages()
        return result

    async def delete(self, product_id: int) -> Result[bool]:
        result = await self._inner.delete(product_id)
        if self._options.enabled and result.is_success:
            await self._invalidate_product(product_id)
            await self._invalidate_search_pages()
        return result

    async def seed(self, count: int) -> Result[int]:
        result = await self._inner.seed(count)
        if self._options.enabled and result.is_success:
            await self._invalidate_search_pages()
        return result

    # =========================================================================
    # Reporting
    # =========================================================================

    def metrics_snapshot(self) -> MetricsSnapshot:
        return self._metrics.snapshot()

    async def health_check(self) -> dict[str, Any]:
        health = await self._cache.health_check()
        health["caching_enabled"] = self._options.enabled
        return health

    async def close(self) -> None:
        await self._cache.close()

    # =========================================================================
    # Guarded cache access
    # =========================================================================

    async def _cache_get(self, key: str, model: type[ModelT]) -> ModelT | None:
        try:
            return await self._cache.get(key, model)
        except Exception as e:
            log_stage(
                logger, Stage.CACHE_GET, "Cache lookup raised, treating as miss",
                level="warning", key=key, error=str(e),
            )
            return None

    async def _cache_set(self, key: str, value: BaseModel, ttl: int) -> None:
        """
        STAGE-PC.3: Cache population
        """
        try:
            stored = await self._cache.set(key, value, ttl)
        except Exception as e:
            log_stage(
                logger, Stage.PRODUCT_CACHE_POPULATE, "Cache population raised",
                level="warning", key=key, error=str(e),
            )
            return
        if stored:
            log_stage(
                logger, Stage.PRODUCT_CACHE_POPULATE, "Cache populated",
                level="debug", key=key, ttl=ttl,
            )

    async def _track_search_key(self, key: str) -> None:
        try:
            await self._cache.add_to_set(ProductCacheKeys.PAGED_INDEX_SET, key)
        except Exception as e:
            log_stage(
                logger, Stage.PRODUCT_CACHE_POPULATE, "Search key registration raised",
                level="warning", key=key, error=str(e),
            )

    async def _invalidate_product(self, product_id: int) -> None:
        """
        STAGE-PC.4: Targeted invalidation
        """
        key = ProductCacheKeys.by_id(product_id)
        try:
            await self._cache.delete(key)
            log_stage(logger, Stage.PRODUCT_INVALIDATE, "Product entry invalidated", level="debug", key=key)
        except Exception as e:
            log_stage(
                logger, Stage.PRODUCT_INVALIDATE, "Product invalidation raised",
                level="warning", key=key, error=str(e),
            )

    async def _invalidate_search_pages(self) -> None:
        """
        STAGE-PC.4: Bulk search invalidation

        The tracking set itself is kept; stale members only cost a no-op
        delete on the next invalidation.
        """
        try:
            keys = await self._cache.get_set_members(ProductCacheKeys.PAGED_INDEX_SET)
            if keys:
                await self._cache.delete_many(keys)
            log_stage(
                logger, Stage.PRODUCT_INVALIDATE, "Search pages invalidated",
                level="debug", key_count=len(keys),
            )
        except Exception as e:
            log_stage(
                logger, Stage.PRODUCT_INVALIDATE, "Search invalidation raised",
                level="warning", error=str(e),
            )
