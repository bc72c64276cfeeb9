"""
Configuration Module

Centralized, type-safe configuration for the product catalog cache.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Key shapes, stage identifiers and default values

Usage:
------
```python
from catalog_cache.core.config import get_settings
from catalog_cache.core.config.constants import Stage

settings = get_settings()
ttl = settings.cache.CACHE_DEFAULT_TTL
```

Environment Variables:
---------------------
```bash
# Redis
REDIS_HOST=localhost
REDIS_PORT=6379

# Cache policy
ENABLE_CACHING=true
CACHE_DEFAULT_TTL=300
CACHE_KEY_PREFIX=pm:

# Logging
LOG_LEVEL=INFO
LOG_FORMAT=json
```

Testing:
-------
```python
import os
from catalog_cache.core.config import reload_settings

os.environ["CACHE_KEY_PREFIX"] = "test:"
settings = reload_settings()
assert settings.cache.CACHE_KEY_PREFIX == "test:"
```
"""

from catalog_cache.core.config.constants import (
    CACHE_DEFAULT_TTL,
    CACHE_INVALIDATION_BATCH_SIZE,
    HEADER_REQUEST_ID,
    PRODUCT_BY_ID_PREFIX,
    PRODUCT_PAGED_INDEX_SET,
    PRODUCT_PAGED_PREFIX,
    CacheBackendType,
    Stage,
)
from catalog_cache.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "CacheBackendType",
    # Cache keys
    "PRODUCT_BY_ID_PREFIX",
    "PRODUCT_PAGED_PREFIX",
    "PRODUCT_PAGED_INDEX_SET",
    # Defaults
    "CACHE_DEFAULT_TTL",
    "CACHE_INVALIDATION_BATCH_SIZE",
    # HTTP headers
    "HEADER_REQUEST_ID",
]
