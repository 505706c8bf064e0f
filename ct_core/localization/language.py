from __future__ import annotations

from ct_core.constants import CANONICAL_LANGUAGE
from ct_core.localization.registry_base import LanguageLink, LocalizationRegistry


class LanguageResolver:
    """Answers which languages exist and which one the current request uses."""

    def __init__(
        self,
        registry: LocalizationRegistry | None,
        *,
        canonical_language: str = CANONICAL_LANGUAGE,
    ) -> None:
        self.registry = registry
        self.canonical_language = canonical_language

    def active_language(self) -> str:
        if self.registry is None:
            return self.canonical_language
        code = self.registry.active_language_code()
        return code or self.canonical_language

    def supported_languages(self) -> list[LanguageLink]:
        if self.registry is None:
            return []
        return list(self.registry.active_languages())

    def language_url(self, code: str) -> str | None:
        for language in self.supported_languages():
            if language.code == code:
                return language.url
        return None
