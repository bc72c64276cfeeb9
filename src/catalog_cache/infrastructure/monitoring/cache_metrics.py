#!/usr/bin/env python3
"""
Cache Hit/Miss Metrics

Thread-safe hit/miss counters for the product cache with a per-key-pattern
breakdown (``product:by-id``, ``product:paged``).

Two views of the same events:
- In-process counters, read through ``snapshot()`` by the /cache/metrics
  endpoint. They live for the process lifetime and are never persisted.
- Prometheus counters (``catalog_cache_hits_total{pattern}`` and
  ``catalog_cache_misses_total{pattern}``) for scraping.

Architectural Decision: prometheus-client for industry-standard metrics
- Compatible with Grafana dashboards
- Pattern label keeps cardinality bounded (never the full key)
"""

import threading
from datetime import UTC, datetime

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, generate_latest
from pydantic import BaseModel, ConfigDict, Field

from catalog_cache.core.config.constants import Stage
from catalog_cache.core.config.settings import get_settings
from catalog_cache.core.logging.logger import get_logger, log_stage
from catalog_cache.infrastructure.cache.keys import ProductCacheKeys

logger = get_logger(__name__)


# ============================================================================
# Metric Definitions
# ============================================================================

CACHE_HITS = Counter(
    'catalog_cache_hits_total',
    'Total product cache hits',
    ['pattern']
)

CACHE_MISSES = Counter(
    'catalog_cache_misses_total',
    'Total product cache misses',
    ['pattern']
)


# ============================================================================
# Snapshot
# ============================================================================


class MetricsSnapshot(BaseModel):
    """Point-in-time copy of the cache counters."""

    model_config = ConfigDict(frozen=True)

    hit_count: int = Field(..., description="Total cache hits")
    miss_count: int = Field(..., description="Total cache misses")
    hit_ratio: float = Field(..., description="hits / (hits + misses), 0.0 when idle")
    total_requests: int = Field(..., description="hits + misses")
    hit_ratio_percentage: float = Field(..., description="hit_ratio as a percentage")
    per_pattern_counts: dict[str, int] = Field(
        default_factory=dict, description="Hits plus misses per key pattern"
    )
    timestamp: datetime = Field(..., description="When the snapshot was taken (UTC)")


# ============================================================================
# Recorder
# ============================================================================


class CacheMetricsRecorder:
    """
    Hit/miss recorder shared by every request.

    STAGE-M.0: Metrics collection

    All counter updates and the snapshot copy happen under one lock, so a
    snapshot never shows a hit counted globally but not per pattern.

    Usage:
        metrics = CacheMetricsRecorder()
        metrics.record_hit("product:by-id:5")
        metrics.record_miss("product:paged:3f1c...")
        snapshot = metrics.snapshot()
    """

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._per_pattern: dict[str, int] = {}

        log_stage(logger, Stage.METRICS, "Cache metrics recorder initialized", enabled=enabled)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def record_hit(self, key: str) -> None:
        if not self._enabled:
            return
        pattern = ProductCacheKeys.pattern_of(key)
        with self._lock:
            self._hits += 1
            self._per_pattern[pattern] = self._per_pattern.get(pattern, 0) + 1
        CACHE_HITS.labels(pattern=pattern).inc()

    def record_miss(self, key: str) -> None:
        if not self._enabled:
            return
        pattern = ProductCacheKeys.pattern_of(key)
        with self._lock:
            self._misses += 1
            self._per_pattern[pattern] = self._per_pattern.get(pattern, 0) + 1
        CACHE_MISSES.labels(pattern=pattern).inc()

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            hits = self._hits
            misses = self._misses
            per_pattern = dict(self._per_pattern)

        total = hits + misses
        hit_ratio = hits / total if total > 0 else 0.0

        return MetricsSnapshot(
            hit_count=hits,
            miss_count=misses,
            hit_ratio=round(hit_ratio, 4),
            total_requests=total,
            hit_ratio_percentage=round(hit_ratio * 100, 2),
            per_pattern_counts=per_pattern,
            timestamp=datetime.now(UTC),
        )

    def get_prometheus_metrics(self) -> bytes:
        """
        Get Prometheus metrics output.

        Returns:
            bytes: Prometheus text format metrics
        """
        return generate_latest(REGISTRY)

    def get_content_type(self) -> str:
        """Get Prometheus content type."""
        return CONTENT_TYPE_LATEST


# Global metrics recorder
_recorder: CacheMetricsRecorder | None = None


def get_cache_metrics() -> CacheMetricsRecorder:
    """Get global cache metrics recorder."""
    global _recorder
    if _recorder is None:
        _recorder = CacheMetricsRecorder(enabled=get_settings().cache.CACHE_METRICS_ENABLED)
    return _recorder
