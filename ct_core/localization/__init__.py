"""Language and origin resolution against a localization registry."""

from ct_core.localization.language import LanguageResolver
from ct_core.localization.origin import OriginResolver
from ct_core.localization.registry_base import (
    LanguageLink,
    LocalizationRegistry,
    RegistryLookupError,
)

__all__ = [
    "LanguageLink",
    "LanguageResolver",
    "LocalizationRegistry",
    "OriginResolver",
    "RegistryLookupError",
]
