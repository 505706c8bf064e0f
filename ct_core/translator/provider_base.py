from __future__ import annotations

from abc import ABC, abstractmethod


class TranslatorError(RuntimeError):
    """Base exception for remote translator failures."""


class ConfigError(TranslatorError):
    """Raised when the translator credential is not configured."""


class ProviderError(TranslatorError):
    """Raised when the remote call fails or returns an unusable response."""


class TranslatorProvider(ABC):
    @abstractmethod
    def translate(
        self,
        *,
        text: str,
        source_language: str,
        target_language: str,
    ) -> str:
        """Translate markup-bearing text from one language to another."""
