from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ct_core.cache.store_base import ContentStore
from ct_core.cache.translation_cache import TranslationCache
from ct_core.constants import CANONICAL_LANGUAGE
from ct_core.content import ContentItem, SaveEvent
from ct_core.corrections.lookup import CorrectionLookup
from ct_core.corrections.source_base import CorrectionSource
from ct_core.eligibility.fields import FieldDefinition
from ct_core.eligibility.policy import EligibilityPolicy
from ct_core.eligibility.settings_base import EligibilitySettings
from ct_core.localization.language import LanguageResolver
from ct_core.localization.origin import OriginResolver
from ct_core.localization.registry_base import LocalizationRegistry, RegistryLookupError
from ct_core.translator.provider_base import ProviderError, TranslatorProvider

logger = logging.getLogger(__name__)


class TranslationEngine:
    """Decides per render call whether content is shown translated.

    Lookup order once every guard passes: editor correction, cached
    translation, remote translator. Only a successful remote call writes the
    cache. A missing translator credential raises ``ConfigError``; every other
    failure degrades to the original content.
    """

    def __init__(
        self,
        *,
        store: ContentStore,
        registry: LocalizationRegistry,
        settings: EligibilitySettings,
        provider: TranslatorProvider,
        corrections: CorrectionSource,
        canonical_language: str = CANONICAL_LANGUAGE,
    ) -> None:
        self.registry = registry
        self.provider = provider
        self.languages = LanguageResolver(registry, canonical_language=canonical_language)
        self.origins = OriginResolver(registry, self.languages)
        self.policy = EligibilityPolicy(settings)
        self.corrections = CorrectionLookup(corrections)
        self.cache = TranslationCache(store)

    def resolve(
        self,
        content: str,
        item: ContentItem | None,
        field_key: str,
        *,
        show_original: bool = False,
        ignore_list: Iterable[str] | None = None,
    ) -> str:
        if item is None:
            return content
        if not content:
            return content
        # Only items linked to an origin are translated; origins render as written.
        if not self.origins.is_duplicate(item):
            return content
        if self.policy.is_excluded(item, field_key, ignore_list):
            return content
        if not self.policy.is_type_eligible(item.content_type):
            return content
        if show_original:
            return content

        origin_language = self.origins.origin_language(item)
        if origin_language is None:
            return content
        active_language = self.languages.active_language()
        if origin_language == active_language:
            return content

        return self.resolve_translation(
            content,
            item,
            field_key,
            origin_language,
            active_language,
        )

    def resolve_translation(
        self,
        content: str,
        item: ContentItem | None,
        field_key: str,
        origin_language: str,
        active_language: str,
    ) -> str:
        corrected = self.corrections.lookup(content)
        if corrected is not None:
            return corrected

        cached = self.cache.get(item, origin_language, active_language, field_key)
        if cached is not None:
            return cached

        scope = f"{item.id}_{field_key}" if item is not None else f"global_{field_key}"
        try:
            translated = self.provider.translate(
                text=content,
                source_language=origin_language,
                target_language=active_language,
            )
        except ProviderError as exc:
            logger.warning("Translation failed for %s: %s", scope, exc)
            return content

        logger.info(
            "Translated %s %s->%s (%d chars)",
            scope,
            origin_language,
            active_language,
            len(content),
        )
        self.cache.put(item, origin_language, active_language, field_key, translated)
        return translated

    def resolve_field(
        self,
        value: Any,
        item: ContentItem | None,
        field: FieldDefinition,
        *,
        show_original: bool = False,
    ) -> Any:
        if item is None or not isinstance(value, str):
            return value
        if not self.policy.is_field_eligible(field, item):
            return value
        return self.resolve(value, item, field.name, show_original=show_original)

    def resolve_global(
        self,
        content: str,
        label_key: str,
        *,
        show_original: bool = False,
    ) -> str:
        """Translate a string owned by no item, caching it in global scope."""

        if not content or show_original:
            return content
        source_language = self.languages.canonical_language
        active_language = self.languages.active_language()
        if source_language == active_language:
            return content
        return self.resolve_translation(content, None, label_key, source_language, active_language)

    def handle_save(self, event: SaveEvent) -> int:
        """Drop cached translations affected by a content save.

        Saving an origin also clears its variants, whose translations were
        derived from the origin's text.
        """

        if event.is_revision or event.is_autosave:
            return 0
        try:
            item = self.registry.get_item(event.item_id)
        except RegistryLookupError as exc:
            logger.debug("Save of unknown item %s ignored: %s", event.item_id, exc)
            return 0

        removed = self.cache.invalidate_all(item, is_revision=event.is_revision)
        if item.is_origin:
            for variant in self.origins.variants_of(item):
                removed += self.cache.invalidate_all(variant)
        return removed
