"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
from unittest.mock import MagicMock

import pytest

from tests.test_fixtures import CacheTestFactory, ProductTestFactory


# ============================================================================
# Global State Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop module-level singletons so each test sees fresh settings and metrics."""
    import catalog_cache.core.config.settings as settings_module
    import catalog_cache.infrastructure.monitoring.cache_metrics as metrics_module

    yield

    settings_module._settings = None
    metrics_module._recorder = None


# ============================================================================
# Mock Configuration Fixtures
# ============================================================================


@pytest.fixture
def mock_settings():
    """
    Mock application settings for testing.

    Returns a MagicMock with the attributes the cache layer reads.
    """
    from catalog_cache.core.config.settings import Settings

    settings = MagicMock(spec=Settings)

    # Redis settings
    settings.redis.REDIS_HOST = "localhost"
    settings.redis.REDIS_PORT = 6379
    settings.redis.REDIS_DB = 0
    settings.redis.REDIS_PASSWORD = None
    settings.redis.REDIS_MAX_CONNECTIONS = 10
    settings.redis.REDIS_SOCKET_TIMEOUT = 0.5
    settings.redis.REDIS_SOCKET_CONNECT_TIMEOUT = 0.5
    settings.redis.REDIS_HEALTH_CHECK_INTERVAL = 30

    # Cache settings
    settings.cache.ENABLE_CACHING = True
    settings.cache.CACHE_DEFAULT_TTL = 300
    settings.cache.CACHE_PRODUCT_DETAIL_TTL = None
    settings.cache.CACHE_PRODUCT_SEARCH_TTL = None
    settings.cache.CACHE_KEY_PREFIX = ""
    settings.cache.CACHE_METRICS_ENABLED = True
    settings.cache.CACHE_INVALIDATION_BATCH_SIZE = 500

    # App settings
    settings.app.ENVIRONMENT = "test"
    settings.app.APP_VERSION = "1.0.0-test"
    settings.app.APP_NAME = "Catalog Cache Test"

    return settings


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Product Store Fixtures
# ============================================================================


@pytest.fixture
def product_store():
    """Mocked ProductStore whose operations all succeed."""
    return ProductTestFactory.product_store()


@pytest.fixture
def failing_product_store():
    """Mocked ProductStore whose operations all return failure results."""
    return ProductTestFactory.failing_product_store()


@pytest.fixture
def sample_product():
    return ProductTestFactory.product()


@pytest.fixture
def sample_page():
    return ProductTestFactory.page()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def in_memory_cache_store():
    """In-memory CacheStore with real JSON encoding."""
    from catalog_cache.core.interfaces.cache import InMemoryCacheStore

    return InMemoryCacheStore()


@pytest.fixture
def mock_cache_store():
    """CacheStore mock that always misses."""
    return CacheTestFactory.mock_cache_store()


@pytest.fixture
def redis_client_with_data():
    """Dict-backed RedisClient mock."""
    return CacheTestFactory.redis_client_with_data()


@pytest.fixture
def failing_redis_client():
    """RedisClient mock whose every command raises CacheKeyError."""
    return CacheTestFactory.failing_redis_client()


@pytest.fixture
def metrics_recorder():
    """Fresh metrics recorder (Prometheus counters are process-global)."""
    from catalog_cache.infrastructure.monitoring.cache_metrics import CacheMetricsRecorder

    return CacheMetricsRecorder()


@pytest.fixture
def cached_service(product_store, in_memory_cache_store, metrics_recorder):
    """CachedProductService over a mocked store and an in-memory cache."""
    from catalog_cache.products.cached_product_service import CacheOptions, CachedProductService

    return CachedProductService(
        inner=product_store,
        cache_store=in_memory_cache_store,
        metrics=metrics_recorder,
        options=CacheOptions(enabled=True, default_ttl=300),
    )
