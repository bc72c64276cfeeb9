"""
Product Cache Wiring

Builds a CachedProductService from settings: cache store (Redis or no-op
fallback), the shared metrics recorder and the cache policy.
"""

from catalog_cache.core.config.constants import Stage
from catalog_cache.core.config.settings import Settings, get_settings
from catalog_cache.core.interfaces.product_store import ProductStore
from catalog_cache.core.logging.logger import get_logger, log_stage
from catalog_cache.infrastructure.cache.cache_store import create_cache_store
from catalog_cache.infrastructure.monitoring.cache_metrics import get_cache_metrics
from catalog_cache.products.cached_product_service import CacheOptions, CachedProductService

logger = get_logger(__name__)


async def build_product_cache(
    inner: ProductStore, settings: Settings | None = None
) -> CachedProductService:
    """
    Wrap ``inner`` with the read-through cache.

    STAGE-PC.0: Product cache initialization

    Never fails because of Redis: an unreachable server yields a service
    backed by the no-op store.
    """
    settings = settings or get_settings()
    options = CacheOptions.from_settings(settings)
    cache_store = await create_cache_store(settings)

    log_stage(
        logger, Stage.PRODUCT_CACHE_INIT, "Product cache initialized",
        enabled=options.enabled,
        backend=cache_store.backend.value,
        by_id_ttl=options.by_id_ttl_seconds,
        paged_ttl=options.paged_ttl_seconds,
    )

    return CachedProductService(
        inner=inner,
        cache_store=cache_store,
        metrics=get_cache_metrics(),
        options=options,
    )
