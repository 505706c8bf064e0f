"""Persistent translation cache keyed by item, language pair and field."""

from ct_core.cache.store_base import ContentStore
from ct_core.cache.translation_cache import (
    CacheKey,
    CacheScope,
    TranslationCache,
    cache_key_for,
    make_key,
)

__all__ = [
    "CacheKey",
    "CacheScope",
    "ContentStore",
    "TranslationCache",
    "cache_key_for",
    "make_key",
]
