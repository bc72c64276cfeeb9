"""
Cache Reporting Routes

Operational endpoints for the product read-through cache.

Endpoints:
    GET  /cache/metrics             Hit/miss snapshot (JSON)
    GET  /cache/metrics/prometheus  Prometheus text exposition
    GET  /cache/health              Cache store health

These endpoints never touch product data; they read the CachedProductService
stored on ``app.state.product_cache`` during startup.
"""

import structlog
from fastapi import APIRouter, HTTPException, Response, status

from catalog_cache.application.api.dependencies import ProductCacheDep
from catalog_cache.application.api.models.cache import CacheHealthResponse, CacheMetricsResponse
from catalog_cache.infrastructure.monitoring.cache_metrics import get_cache_metrics

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"])


# ============================================================================
# METRICS ENDPOINTS
# ============================================================================


@router.get(
    "/metrics",
    response_model=CacheMetricsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_cache_metrics_snapshot(product_cache: ProductCacheDep):
    """
    Retrieve the product cache hit/miss counters.

    Returns:
        CacheMetricsResponse: Counters, hit ratio and per-pattern breakdown
    """
    try:
        snapshot = product_cache.metrics_snapshot()
        logger.debug(
            "get_cache_metrics_completed",
            hit_count=snapshot.hit_count,
            miss_count=snapshot.miss_count,
        )
        return CacheMetricsResponse.from_snapshot(snapshot)

    except Exception as e:
        logger.error("get_cache_metrics_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve cache metrics",
        ) from e


@router.get("/metrics/prometheus", status_code=status.HTTP_200_OK)
async def get_prometheus_cache_metrics():
    """
    Export cache counters in Prometheus text format.

    Metrics:
        catalog_cache_hits_total{pattern}
        catalog_cache_misses_total{pattern}
    """
    recorder = get_cache_metrics()
    return Response(
        content=recorder.get_prometheus_metrics(),
        media_type=recorder.get_content_type(),
    )


# ============================================================================
# HEALTH ENDPOINT
# ============================================================================


@router.get(
    "/health",
    response_model=CacheHealthResponse,
    status_code=status.HTTP_200_OK,
)
async def get_cache_health(product_cache: ProductCacheDep):
    """
    Report the health of the cache store.

    A degraded cache is reported, not failed: the product API keeps serving
    from the store, so this endpoint returns 200 with ``status`` set to
    ``unhealthy`` when Redis does not answer.
    """
    try:
        health = await product_cache.health_check()
    except Exception as e:
        logger.error("get_cache_health_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve cache health",
        ) from e

    return CacheHealthResponse.from_health(health)
