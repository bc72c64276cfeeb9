"""
Cache-Related Exceptions

All exceptions related to caching operations. None of these ever reach a
product API caller: the Redis cache store converts them into fail-open
results (absent on read, no-op on write).
"""

from catalog_cache.core.exceptions.base import CatalogCacheError


class CacheError(CatalogCacheError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to the cache (Redis).

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a cache key operation fails.

    Common causes:
    - Operation timeout
    - Wrong type stored under the key
    - Memory limit exceeded
    """
    pass


class CacheSerializationError(CacheError):
    """
    Raised when a cached value cannot be encoded or decoded.

    Common causes:
    - Corrupt or truncated entry
    - Entry written by an incompatible schema version
    - Value type that JSON cannot represent
    """
    pass
