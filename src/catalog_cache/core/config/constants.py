"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the product catalog cache.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for key shapes and magic numbers
- Type-safe enums for log stages
- Easy to update and track changes
"""

from decimal import Decimal
from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Processing stages used as the ``stage`` field of log events.

    Format: {PREFIX}.{SEQUENCE}
    - PREFIX: Component (PC = product cache, CACHE = cache store,
      REDIS = Redis client, M = metrics)
    - SEQUENCE: Step within the component

    Logs are immediately understandable without a code lookup, and a
    dashboard can filter a single component with a prefix match.
    """

    # Product cache decorator
    PRODUCT_CACHE_INIT = "PC.0"
    PRODUCT_BY_ID_LOOKUP = "PC.1"
    PRODUCT_SEARCH_LOOKUP = "PC.2"
    PRODUCT_CACHE_POPULATE = "PC.3"
    PRODUCT_INVALIDATE = "PC.4"

    # Cache store operations
    CACHE_GET = "CACHE.GET"
    CACHE_SET = "CACHE.SET"
    CACHE_DEL = "CACHE.DEL"
    CACHE_SADD = "CACHE.SADD"
    CACHE_SMEMBERS = "CACHE.SMEMBERS"
    CACHE_WIRING = "CACHE.WIRING"

    # Metrics
    METRICS = "M.0"


# ============================================================================
# Cache Backends
# ============================================================================


class CacheBackendType(str, Enum):
    """
    Cache store implementations.

    REDIS: Remote key/value store with expiry and native sets
    NOOP: Fallback used when caching is disabled or Redis is unreachable
    """

    REDIS = "redis"
    NOOP = "noop"


# ============================================================================
# Cache Keys
# ============================================================================

PRODUCT_BY_ID_PREFIX = "product:by-id"
PRODUCT_PAGED_PREFIX = "product:paged"
PRODUCT_PAGED_INDEX_SET = "product:paged:index"

# ============================================================================
# Cache Defaults
# ============================================================================

CACHE_DEFAULT_TTL = 300  # 5 minutes
CACHE_INVALIDATION_BATCH_SIZE = 500  # Keys per DEL command

# Prices are rendered with fixed precision inside search-key signatures
PRICE_KEY_FORMAT = ".2f"
PRICE_BOUND_QUANTUM = Decimal("0.01")

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"
