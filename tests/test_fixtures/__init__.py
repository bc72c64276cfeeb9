"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory
from .product_factory import ProductTestFactory

__all__ = ["CacheTestFactory", "ProductTestFactory"]
