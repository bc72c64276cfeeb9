"""
Cache Store Implementations

Architecture:
    create_cache_store (Wiring)
        ├── RedisCacheStore (Redis-backed, fail-open)
        └── NoOpCacheStore (Fallback: caching disabled or Redis unreachable)

RedisCacheStore is the single place where Redis and serialization errors
are caught. Every failure is logged at warning level and converted into a
miss (reads) or a ``False`` result (writes); nothing propagates to the
product API.

Key prefixing:
    Callers pass logical keys (``product:by-id:5``). The configured
    CACHE_KEY_PREFIX is added to every key sent to Redis, including the
    tracking-set key. Tracking-set members are stored as logical keys and
    prefixed again when they are deleted.
"""

from typing import Any, TypeVar

import orjson
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from catalog_cache.core.config.constants import (
    CACHE_INVALIDATION_BATCH_SIZE,
    CacheBackendType,
    Stage,
)
from catalog_cache.core.config.settings import Settings, get_settings
from catalog_cache.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
)
from catalog_cache.core.logging.logger import get_logger, log_stage
from catalog_cache.infrastructure.cache.redis_client import RedisClient

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


# =============================================================================
# LAYER 1: SERIALIZATION
# =============================================================================


def encode_value(value: BaseModel) -> str:
    """
    Encode a model as a JSON string.

    Raises:
        CacheSerializationError: If the model cannot be rendered as JSON
    """
    try:
        return orjson.dumps(value.model_dump(mode="json")).decode("utf-8")
    except (orjson.JSONEncodeError, PydanticSerializationError) as e:
        raise CacheSerializationError.from_exception(
            e, message="Failed to encode cache value", model=type(value).__name__
        ) from e


def decode_value(raw: str | bytes, model: type[ModelT]) -> ModelT:
    """
    Decode a JSON entry and validate it against ``model``.

    Raises:
        CacheSerializationError: On malformed JSON or a schema mismatch
    """
    try:
        return model.model_validate(orjson.loads(raw))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise CacheSerializationError.from_exception(
            e, message="Failed to decode cache value", model=model.__name__
        ) from e


# =============================================================================
# LAYER 2: STORE IMPLEMENTATIONS
# =============================================================================


class RedisCacheStore:
    """
    Redis-backed cache store.

    Usage:
        client = RedisClient(settings)
        await client.connect()
        store = RedisCacheStore(client, key_prefix="pm:")

        await store.set("product:by-id:5", product, ttl=300)
        cached = await store.get("product:by-id:5", ProductResponse)
    """

    backend = CacheBackendType.REDIS

    def __init__(
        self,
        client: RedisClient,
        key_prefix: str = "",
        batch_size: int = CACHE_INVALIDATION_BATCH_SIZE,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._client = client
        self._key_prefix = key_prefix
        self._batch_size = batch_size

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def _full_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str, model: type[ModelT]) -> ModelT | None:
        try:
            raw = await self._client.get(self._full_key(key))
        except CacheError as e:
            log_stage(
                logger, Stage.CACHE_GET, "Cache read failed, treating as miss",
                level="warning", key=key, error=str(e),
            )
            return None

        if raw is None:
            return None

        try:
            return decode_value(raw, model)
        except CacheSerializationError as e:
            log_stage(
                logger, Stage.CACHE_GET, "Cached value could not be decoded, treating as miss",
                level="warning", key=key, error=str(e),
            )
            return None

    async def set(self, key: str, value: BaseModel, ttl: int | None = None) -> bool:
        try:
            payload = encode_value(value)
            return await self._client.set(self._full_key(key), payload, ttl=ttl)
        except CacheError as e:
            log_stage(
                logger, Stage.CACHE_SET, "Cache write failed",
                level="warning", key=key, ttl=ttl, error=str(e),
            )
            return False

    async def delete(self, key: str) -> bool:
        try:
            await self._client.delete(self._full_key(key))
            return True
        except CacheError as e:
            log_stage(
                logger, Stage.CACHE_DEL, "Cache delete failed",
                level="warning", key=key, error=str(e),
            )
            return False

    async def delete_many(self, keys: list[str]) -> bool:
        """
        Delete keys in batches of ``batch_size``.

        A failed batch is logged and skipped; later batches still run.

        Returns:
            bool: True only if every batch succeeded
        """
        if not keys:
            return True

        full_keys = [self._full_key(key) for key in keys]
        succeeded = True
        for start in range(0, len(full_keys), self._batch_size):
            batch = full_keys[start:start + self._batch_size]
            try:
                await self._client.delete(*batch)
            except CacheError as e:
                succeeded = False
                log_stage(
                    logger, Stage.CACHE_DEL, "Cache bulk delete batch failed",
                    level="warning", batch_start=start, batch_size=len(batch), error=str(e),
                )
        return succeeded

    async def add_to_set(self, set_key: str, member: str) -> bool:
        try:
            await self._client.sadd(self._full_key(set_key), member)
            return True
        except CacheError as e:
            log_stage(
                logger, Stage.CACHE_SADD, "Cache set add failed",
                level="warning", set_key=set_key, member=member, error=str(e),
            )
            return False

    async def get_set_members(self, set_key: str) -> list[str]:
        try:
            members = await self._client.smembers(self._full_key(set_key))
        except CacheError as e:
            log_stage(
                logger, Stage.CACHE_SMEMBERS, "Cache set read failed",
                level="warning", set_key=set_key, error=str(e),
            )
            return []
        return sorted(members or ())

    async def health_check(self) -> dict[str, Any]:
        health = await self._client.health_check()
        health["backend"] = self.backend.value
        return health

    async def close(self) -> None:
        await self._client.disconnect()


class NoOpCacheStore:
    """
    Cache store that stores nothing.

    Reads always miss, writes return immediately. Used when caching is
    disabled or Redis could not be reached at startup.
    """

    backend = CacheBackendType.NOOP

    async def get(self, key: str, model: type[ModelT]) -> ModelT | None:
        return None

    async def set(self, key: str, value: BaseModel, ttl: int | None = None) -> bool:
        return True

    async def delete(self, key: str) -> bool:
        return True

    async def delete_many(self, keys: list[str]) -> bool:
        return True

    async def add_to_set(self, set_key: str, member: str) -> bool:
        return True

    async def get_set_members(self, set_key: str) -> list[str]:
        return []

    async def health_check(self) -> dict[str, Any]:
        return {"status": "healthy", "backend": self.backend.value}

    async def close(self) -> None:
        return None


# =============================================================================
# LAYER 3: WIRING
# =============================================================================


async def create_cache_store(settings: Settings | None = None) -> RedisCacheStore | NoOpCacheStore:
    """
    Build the cache store for the current configuration.

    STAGE-CACHE.WIRING

    Falls back to NoOpCacheStore when caching is disabled or when Redis
    cannot be reached; the application keeps serving from the product
    store in both cases.

    Args:
        settings: Settings to use (defaults to the global settings)

    Returns:
        A connected RedisCacheStore, or a NoOpCacheStore
    """
    settings = settings or get_settings()
    cache_settings = settings.cache

    if not cache_settings.ENABLE_CACHING:
        log_stage(logger, Stage.CACHE_WIRING, "Caching disabled, using no-op cache store")
        return NoOpCacheStore()

    client = RedisClient(settings)
    try:
        await client.connect()
    except CacheConnectionError as e:
        log_stage(
            logger, Stage.CACHE_WIRING, "Redis unavailable, falling back to no-op cache store",
            level="warning", error=e.message, **e.details,
        )
        return NoOpCacheStore()

    log_stage(
        logger, Stage.CACHE_WIRING, "Redis cache store ready",
        key_prefix=cache_settings.CACHE_KEY_PREFIX,
        batch_size=cache_settings.CACHE_INVALIDATION_BATCH_SIZE,
    )
    return RedisCacheStore(
        client,
        key_prefix=cache_settings.CACHE_KEY_PREFIX,
        batch_size=cache_settings.CACHE_INVALIDATION_BATCH_SIZE,
    )
