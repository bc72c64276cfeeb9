"""
Core Interfaces Module

This module provides abstract interfaces and protocols for core components,
enabling dependency injection, testability, and loose coupling.

Components:
-----------
- **cache.py**: CacheStore protocol for cache store implementations
- **product_store.py**: ProductStore protocol for product persistence

Architecture:
------------
Interfaces follow the Protocol pattern (PEP 544) for structural subtyping:
- Runtime type checking with @runtime_checkable
- Duck typing with type safety
- No inheritance required
- Easy mocking for tests

Usage:
------
```python
from catalog_cache.core.interfaces import CacheStore, ProductStore

def build(store: ProductStore, cache: CacheStore): ...
```
"""

from catalog_cache.core.interfaces.cache import CacheStore, InMemoryCacheStore
from catalog_cache.core.interfaces.product_store import ProductStore

__all__ = [
    # Cache interfaces
    "CacheStore",
    "InMemoryCacheStore",
    # Persistence interfaces
    "ProductStore",
]
