"""
Cache API Response Models

Response bodies of the /cache reporting endpoints. Field names follow the
metrics snapshot so dashboards can read either source.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from catalog_cache.infrastructure.monitoring.cache_metrics import MetricsSnapshot


class CacheMetricsResponse(BaseModel):
    """Hit/miss counters of the product cache."""

    hit_count: int = Field(..., ge=0, description="Total cache hits since process start")
    miss_count: int = Field(..., ge=0, description="Total cache misses since process start")
    hit_ratio: float = Field(..., ge=0.0, le=1.0, description="hits / (hits + misses)")
    total_requests: int = Field(..., ge=0, description="hits + misses")
    hit_ratio_percentage: float = Field(..., ge=0.0, le=100.0, description="Hit ratio as a percentage")
    per_pattern_counts: dict[str, int] = Field(
        default_factory=dict,
        description="Lookups per key pattern (e.g. product:by-id, product:paged)",
    )
    timestamp: datetime = Field(..., description="Snapshot time (UTC)")

    @classmethod
    def from_snapshot(cls, snapshot: MetricsSnapshot) -> "CacheMetricsResponse":
        return cls(**snapshot.model_dump())


class CacheHealthResponse(BaseModel):
    """Health of the cache store behind the product cache."""

    status: str = Field(..., description="healthy or unhealthy")
    backend: str = Field(..., description="Cache store backend (redis, noop)")
    caching_enabled: bool = Field(..., description="Whether the read-through cache is active")
    ping_latency_ms: float | None = Field(
        default=None, description="Redis PING round trip (redis backend only)"
    )
    details: dict[str, Any] = Field(
        default_factory=dict, description="Backend-specific fields (pool size, errors, ...)"
    )

    @classmethod
    def from_health(cls, health: dict[str, Any]) -> "CacheHealthResponse":
        known = {"status", "backend", "caching_enabled", "ping_latency_ms"}
        return cls(
            status=health.get("status", "unhealthy"),
            backend=health.get("backend", "unknown"),
            caching_enabled=health.get("caching_enabled", False),
            ping_latency_ms=health.get("ping_latency_ms"),
            details={k: v for k, v in health.items() if k not in known},
        )
