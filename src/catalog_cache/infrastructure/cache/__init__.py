"""
Cache Module

Redis-backed key/value store for the product read-through cache, with a
no-op fallback and deterministic key derivation.
"""

from .cache_store import (
    NoOpCacheStore,
    RedisCacheStore,
    create_cache_store,
)
from .keys import ProductCacheKeys
from .redis_client import RedisClient

__all__ = [
    "NoOpCacheStore",
    "ProductCacheKeys",
    "RedisCacheStore",
    "RedisClient",
    "create_cache_store",
]
