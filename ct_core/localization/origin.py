from __future__ import annotations

import logging

from ct_core.content import ContentItem
from ct_core.localization.language import LanguageResolver
from ct_core.localization.registry_base import LocalizationRegistry, RegistryLookupError

logger = logging.getLogger(__name__)


class OriginResolver:
    """Maps items to their canonical-language origin.

    Registry failures never escape: an unknown item is treated as carrying no
    localization information, so rendering continues with the item as given.
    """

    def __init__(self, registry: LocalizationRegistry, languages: LanguageResolver) -> None:
        self.registry = registry
        self.languages = languages

    def origin_of(self, item: ContentItem) -> ContentItem:
        if item.origin_id is None:
            return item
        try:
            return self.registry.get_item(item.origin_id)
        except RegistryLookupError as exc:
            logger.debug("No origin for item %s: %s", item.id, exc)
            return item

    def origin_id_of(self, item: ContentItem) -> int:
        return item.origin_key

    def language_of(self, item: ContentItem) -> str:
        try:
            return self.registry.language_of(item.id)
        except RegistryLookupError as exc:
            logger.debug("No language for item %s: %s", item.id, exc)
            return self.languages.canonical_language

    def origin_language(self, item: ContentItem) -> str | None:
        """Language of the item's origin, or None when the origin is unresolvable."""

        origin = self.origin_of(item)
        if origin is item and item.origin_id is not None:
            return None
        try:
            return self.registry.language_of(origin.id)
        except RegistryLookupError as exc:
            logger.debug("No origin language for item %s: %s", item.id, exc)
            return None

    def is_duplicate(self, item: ContentItem) -> bool:
        try:
            return self.registry.origin_of(item.id) is not None
        except RegistryLookupError as exc:
            logger.debug("No duplicate link for item %s: %s", item.id, exc)
            return False

    def is_variant(self, item: ContentItem) -> bool:
        # A duplicate-of relation wins even when the languages already match.
        if self.language_of(item) != self.languages.active_language():
            return True
        return self.is_duplicate(item)

    def variants_of(self, item: ContentItem) -> list[ContentItem]:
        try:
            return self.registry.variants_of(item.id)
        except RegistryLookupError as exc:
            logger.debug("No variants for item %s: %s", item.id, exc)
            return []
