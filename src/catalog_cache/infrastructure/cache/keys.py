"""
Product Cache Keys

Deterministic cache-key derivation for product reads.

Key shapes:
    product:by-id:{id}
    product:paged:{sha256-hex}
    product:paged:index          (tracking set of live paged keys)

A paged key hashes a canonical ``name=value|...`` rendering of every
search field in a fixed order, so equal criteria always map to the same
key and any differing field maps to a different one. Values are
percent-encoded, so a ``|`` or ``=`` typed into a search field cannot
forge another field. Keys here are
logical: the Redis store adds the configured prefix on the wire.
"""

import hashlib
from decimal import Decimal
from urllib.parse import quote

from catalog_cache.core.config.constants import (
    PRICE_KEY_FORMAT,
    PRODUCT_BY_ID_PREFIX,
    PRODUCT_PAGED_INDEX_SET,
    PRODUCT_PAGED_PREFIX,
)
from catalog_cache.products.models import SearchCriteria


def _text(value: str | None) -> str:
    # None and "" render identically
    return value or ""


def _price(value: Decimal | None) -> str:
    return "" if value is None else format(value, PRICE_KEY_FORMAT)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class ProductCacheKeys:
    """
    Key builder for the product cache. Pure functions, no I/O.

    Usage:
        ProductCacheKeys.by_id(5)                  # "product:by-id:5"
        ProductCacheKeys.paged(SearchCriteria())   # "product:paged:3f1c..."
    """

    PAGED_INDEX_SET = PRODUCT_PAGED_INDEX_SET

    @staticmethod
    def by_id(product_id: int) -> str:
        return f"{PRODUCT_BY_ID_PREFIX}:{product_id}"

    @staticmethod
    def signature(criteria: SearchCriteria) -> str:
        """
        Canonical rendering of the search criteria.

        Field order is fixed; changing it invalidates every cached page.
        """
        parts = [
            ("p", str(criteria.page)),
            ("s", str(criteria.page_size)),
            ("search", _text(criteria.search_term)),
            ("cat", _text(criteria.category)),
            ("brand", _text(criteria.brand)),
            ("min", _price(criteria.min_price)),
            ("max", _price(criteria.max_price)),
            ("sort", _text(criteria.sort_by)),
            ("desc", _flag(criteria.descending)),
        ]
        return "|".join(f"{name}={quote(value, safe='')}" for name, value in parts)

    @classmethod
    def paged(cls, criteria: SearchCriteria) -> str:
        digest = hashlib.sha256(cls.signature(criteria).encode("utf-8")).hexdigest()
        return f"{PRODUCT_PAGED_PREFIX}:{digest}"

    @staticmethod
    def pattern_of(key: str) -> str:
        """
        Metrics bucket of a key: its first two ``:`` segments.

        ``product:by-id:5`` -> ``product:by-id``; a key without a second
        segment is its own pattern.
        """
        return ":".join(key.split(":", 2)[:2])
