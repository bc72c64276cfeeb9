"""
Exception Module

Structured exception hierarchy for the product catalog cache.

Module Structure:
-----------------
- **base.py**: CatalogCacheError base class
- **cache.py**: Cache-related exceptions (Redis, serialization)

Usage:
------
```python
from catalog_cache.core.exceptions import CacheConnectionError
from catalog_cache.core.exceptions.cache import CacheError, CacheKeyError
```
"""

from catalog_cache.core.exceptions.base import CatalogCacheError
from catalog_cache.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    CacheSerializationError,
)

__all__ = [
    # Base
    "CatalogCacheError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "CacheSerializationError",
]
