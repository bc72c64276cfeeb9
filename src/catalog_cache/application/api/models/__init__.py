"""
API Models

Pydantic response models for the cache reporting endpoints.
"""

from .cache import CacheHealthResponse, CacheMetricsResponse

__all__ = [
    "CacheHealthResponse",
    "CacheMetricsResponse",
]
