"""Remote machine-translation providers and their credential."""

from ct_core.translator.provider_base import (
    ConfigError,
    ProviderError,
    TranslatorError,
    TranslatorProvider,
)
from ct_core.translator.provider_google import GoogleTranslateProvider
from ct_core.translator.provider_mock import MockTranslatorProvider
from ct_core.translator.secrets import (
    GOOGLE_TRANSLATE_SECRET,
    delete_secret,
    get_secret,
    list_secret_statuses,
    mask_secret_value,
    set_secret,
)

__all__ = [
    "ConfigError",
    "GOOGLE_TRANSLATE_SECRET",
    "GoogleTranslateProvider",
    "MockTranslatorProvider",
    "ProviderError",
    "TranslatorError",
    "TranslatorProvider",
    "delete_secret",
    "get_secret",
    "list_secret_statuses",
    "mask_secret_value",
    "set_secret",
]
