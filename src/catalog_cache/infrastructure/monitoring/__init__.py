"""
Monitoring Module

Hit/miss metrics for the product cache.
"""

from .cache_metrics import (
    CacheMetricsRecorder,
    MetricsSnapshot,
    get_cache_metrics,
)

__all__ = [
    "CacheMetricsRecorder",
    "MetricsSnapshot",
    "get_cache_metrics",
]
