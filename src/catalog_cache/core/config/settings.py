#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
product catalog cache. All configuration is centralized here to ensure
consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- IDE autocomplete for all settings
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_cache.core.config.constants import CACHE_DEFAULT_TTL, CACHE_INVALIDATION_BATCH_SIZE


class RedisSettings(BaseSettings):
    """
    Redis configuration for the product cache backing store.

    Connection pooling: one pool shared by every concurrent request.
    Socket timeouts bound each remote call; a timeout degrades to a cache
    miss, never to a failed request.
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=2.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Product cache policy.

    ENABLE_CACHING is the master off-switch: when false the decorator
    delegates straight to the product store.
    """

    ENABLE_CACHING: bool = Field(default=True, description="Enable the product read-through cache")
    CACHE_DEFAULT_TTL: int = Field(default=CACHE_DEFAULT_TTL, gt=0, description="Default entry TTL in seconds")
    CACHE_PRODUCT_DETAIL_TTL: int | None = Field(
        default=None, gt=0, description="TTL override for by-id entries"
    )
    CACHE_PRODUCT_SEARCH_TTL: int | None = Field(
        default=None, gt=0, description="TTL override for search page entries"
    )
    CACHE_KEY_PREFIX: str = Field(default="", description="Prefix applied to every Redis key")
    CACHE_METRICS_ENABLED: bool = Field(default=True, description="Record hit/miss metrics")
    CACHE_INVALIDATION_BATCH_SIZE: int = Field(
        default=CACHE_INVALIDATION_BATCH_SIZE, gt=0, description="Keys per DEL during bulk invalidation"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """General application settings."""

    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Product Catalog Cache", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from catalog_cache.core.config.settings import get_settings

        settings = get_settings()
        redis_host = settings.redis.REDIS_HOST
        ttl = settings.cache.CACHE_DEFAULT_TTL

    Fields live at the root so a flat environment maps onto them directly;
    the grouped properties below give each component its own view.
    """

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=2.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Cache settings
    ENABLE_CACHING: bool = Field(default=True, description="Enable the product read-through cache")
    CACHE_DEFAULT_TTL: int = Field(default=CACHE_DEFAULT_TTL, gt=0, description="Default entry TTL in seconds")
    CACHE_PRODUCT_DETAIL_TTL: int | None = Field(
        default=None, gt=0, description="TTL override for by-id entries"
    )
    CACHE_PRODUCT_SEARCH_TTL: int | None = Field(
        default=None, gt=0, description="TTL override for search page entries"
    )
    CACHE_KEY_PREFIX: str = Field(default="", description="Prefix applied to every Redis key")
    CACHE_METRICS_ENABLED: bool = Field(default=True, description="Record hit/miss metrics")
    CACHE_INVALIDATION_BATCH_SIZE: int = Field(
        default=CACHE_INVALIDATION_BATCH_SIZE, gt=0, description="Keys per DEL during bulk invalidation"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Product Catalog Cache", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @property
    def redis(self) -> RedisSettings:
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def cache(self) -> CacheSettings:
        """Get cache settings."""
        return CacheSettings(
            ENABLE_CACHING=self.ENABLE_CACHING,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_PRODUCT_DETAIL_TTL=self.CACHE_PRODUCT_DETAIL_TTL,
            CACHE_PRODUCT_SEARCH_TTL=self.CACHE_PRODUCT_SEARCH_TTL,
            CACHE_KEY_PREFIX=self.CACHE_KEY_PREFIX,
            CACHE_METRICS_ENABLED=self.CACHE_METRICS_ENABLED,
            CACHE_INVALIDATION_BATCH_SIZE=self.CACHE_INVALIDATION_BATCH_SIZE,
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    @property
    def app(self) -> ApplicationSettings:
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
