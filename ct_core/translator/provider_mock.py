from __future__ import annotations

from ct_core.translator.provider_base import TranslatorProvider


class MockTranslatorProvider(TranslatorProvider):
    """Offline stand-in that tags text with the target language."""

    def translate(
        self,
        *,
        text: str,
        source_language: str,
        target_language: str,
    ) -> str:
        del source_language
        return f"[{target_language}] {text}"
