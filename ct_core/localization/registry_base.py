from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ct_core.content import ContentItem


class RegistryLookupError(LookupError):
    """Raised when the registry has no localization data for an item."""


@dataclass(slots=True, frozen=True)
class LanguageLink:
    code: str
    url: str


class LocalizationRegistry(ABC):
    @abstractmethod
    def active_language_code(self) -> str | None:
        """Language of the current request, or None when no language is set."""

    @abstractmethod
    def active_languages(self) -> list[LanguageLink]:
        ...

    @abstractmethod
    def get_item(self, item_id: int) -> ContentItem:
        """Load an item; raise RegistryLookupError when it is unknown."""

    @abstractmethod
    def language_of(self, item_id: int) -> str:
        ...

    @abstractmethod
    def origin_of(self, item_id: int) -> int | None:
        """Id of the item this one duplicates, or None for an origin."""

    @abstractmethod
    def variants_of(self, item_id: int) -> list[ContentItem]:
        """Every item that duplicates ``item_id``."""

    def make_duplicates(self, item_id: int) -> list[ContentItem]:
        """Create missing duplicates of an origin in every supported language."""
        raise NotImplementedError(f"{type(self).__name__} cannot duplicate content.")
