from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ct_core.cache.store_base import ContentStore
from ct_core.constants import CACHE_KEY_PREFIX
from ct_core.content import ContentItem

logger = logging.getLogger(__name__)


class CacheScope(str, Enum):
    ITEM = "item"
    GLOBAL = "global"


@dataclass(slots=True, frozen=True)
class CacheKey:
    scope: CacheScope
    scope_id: int | None
    source_language: str
    target_language: str
    field_key: str

    @property
    def token(self) -> str:
        return make_key(self.source_language, self.target_language, self.field_key)


def make_key(source_language: str, target_language: str, field_key: str) -> str:
    return f"{CACHE_KEY_PREFIX}{source_language}_{target_language}_{field_key}"


def cache_key_for(
    item: ContentItem | None,
    source_language: str,
    target_language: str,
    field_key: str,
) -> CacheKey:
    if item is None:
        return CacheKey(CacheScope.GLOBAL, None, source_language, target_language, field_key)
    return CacheKey(CacheScope.ITEM, item.id, source_language, target_language, field_key)


class TranslationCache:
    """Stores machine translations in item meta, or in options for global strings.

    Entries never expire; they are dropped in bulk when the owning item is saved.
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def get(
        self,
        item: ContentItem | None,
        source_language: str,
        target_language: str,
        field_key: str,
    ) -> str | None:
        key = cache_key_for(item, source_language, target_language, field_key)
        if key.scope_id is None:
            value = self.store.get_option(key.token)
        else:
            value = self.store.get_item_meta(key.scope_id, key.token)
        return value or None

    def put(
        self,
        item: ContentItem | None,
        source_language: str,
        target_language: str,
        field_key: str,
        value: str,
    ) -> None:
        key = cache_key_for(item, source_language, target_language, field_key)
        if key.scope_id is None:
            self.store.set_option(key.token, value)
        else:
            self.store.set_item_meta(key.scope_id, key.token, value)

    def invalidate_all(self, item: ContentItem, *, is_revision: bool = False) -> int:
        if is_revision:
            return 0
        removed = self.store.delete_item_meta_by_prefix(item.id, CACHE_KEY_PREFIX)
        logger.info("Removed %d cached translations for item %s", removed, item.id)
        return removed

    def invalidate_global(self) -> int:
        removed = self.store.delete_options_by_prefix(CACHE_KEY_PREFIX)
        logger.info("Removed %d global cached translations", removed)
        return removed
