"""
Product Catalog Cache

Read-through Redis cache in front of a product catalog store: deterministic
key derivation, cache-aside reads, write-path invalidation and hit/miss
metrics.
"""

__version__ = "1.0.0"
