"""
Cache Store Protocol

This module defines the abstract protocol for the key/value store that backs
the product read-through cache.

Architectural Decision: Protocol-based abstraction
- Redis and no-op implementations are interchangeable at wiring time
- Facilitates testing with in-memory implementations
- Type-safe interface with runtime checking

Contract:
    Implementations never raise on a backend or serialization failure.
    Reads degrade to "absent" and writes degrade to a no-op reported as
    ``False``, so a cache outage can only cost latency.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

import orjson
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@runtime_checkable
class CacheStore(Protocol):
    """
    Protocol defining the key/value operations used by the product cache.

    Implementations:
    - RedisCacheStore: Production Redis-backed store
    - NoOpCacheStore: Fallback when caching is disabled or Redis is down
    - InMemoryCacheStore: Testing/development in-memory store

    Usage:
        async def lookup(store: CacheStore, key: str) -> ProductResponse | None:
            return await store.get(key, ProductResponse)
    """

    async def get(self, key: str, model: type[ModelT]) -> ModelT | None:
        """
        Get and decode a cached value.

        Args:
            key: Logical cache key
            model: Pydantic model the JSON entry is validated against

        Returns:
            Decoded value, or None when absent, undecodable or unreachable
        """
        ...

    async def set(self, key: str, value: BaseModel, ttl: int | None = None) -> bool:
        """
        Encode and store a value.

        Args:
            key: Logical cache key
            value: Pydantic model to store as JSON
            ttl: Time-to-live in seconds (optional)

        Returns:
            bool: True if stored, False on any failure
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete one key. Deleting an absent key succeeds."""
        ...

    async def delete_many(self, keys: list[str]) -> bool:
        """
        Delete several keys.

        An empty list makes no backend call and succeeds.
        """
        ...

    async def add_to_set(self, set_key: str, member: str) -> bool:
        """Add a member to a set (idempotent)."""
        ...

    async def get_set_members(self, set_key: str) -> list[str]:
        """
        Get all members of a set.

        Returns:
            list[str]: Members, or [] when the set is absent or unreachable
        """
        ...

    async def health_check(self) -> dict[str, Any]:
        """
        Report store health.

        Returns:
            Dict with at least ``status`` and ``backend``
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


class InMemoryCacheStore:
    """
    Simple in-memory cache store for testing.

    Implements the CacheStore protocol without external dependencies.
    Values go through the same JSON encoding as the Redis store, so a
    round trip here exercises model serialization too.

    Note: TTLs are recorded but never enforced. Use only for testing.
    """

    def __init__(self):
        self._store: dict[str, str] = {}
        self._ttls: dict[str, int] = {}
        self._sets: dict[str, set[str]] = {}

    async def get(self, key: str, model: type[ModelT]) -> ModelT | None:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return model.model_validate(orjson.loads(raw))
        except (orjson.JSONDecodeError, ValidationError):
            return None

    async def set(self, key: str, value: BaseModel, ttl: int | None = None) -> bool:
        self._store[key] = orjson.dumps(value.model_dump(mode="json")).decode("utf-8")
        if ttl:
            self._ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        self._store.pop(key, None)
        self._ttls.pop(key, None)
        return True

    async def delete_many(self, keys: list[str]) -> bool:
        for key in keys:
            await self.delete(key)
        return True

    async def add_to_set(self, set_key: str, member: str) -> bool:
        self._sets.setdefault(set_key, set()).add(member)
        return True

    async def get_set_members(self, set_key: str) -> list[str]:
        return sorted(self._sets.get(set_key, set()))

    async def health_check(self) -> dict[str, Any]:
        """Health check."""
        return {
            "status": "healthy",
            "backend": "memory",
            "keys_count": len(self._store),
        }

    async def close(self) -> None:
        self._store.clear()
        self._ttls.clear()
        self._sets.clear()

    def contains(self, key: str) -> bool:
        """Check whether a key is currently stored."""
        return key in self._store

    def ttl_of(self, key: str) -> int | None:
        """TTL recorded for a key, if any."""
        return self._ttls.get(key)
