from __future__ import annotations

from ct_core.site.config import TranslatorConfig
from ct_core.translator.provider_base import TranslatorProvider
from ct_core.translator.provider_google import GoogleTranslateProvider
from ct_core.translator.provider_mock import MockTranslatorProvider


def build_provider(config: TranslatorConfig) -> TranslatorProvider:
    if config.provider == "mock":
        return MockTranslatorProvider()
    if config.provider == "google":
        return GoogleTranslateProvider(
            endpoint=config.endpoint,
            timeout_seconds=config.timeout_seconds,
        )
    raise ValueError(f"Unsupported translator provider: {config.provider}")
