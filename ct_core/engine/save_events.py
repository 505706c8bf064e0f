from __future__ import annotations

import logging
from collections.abc import Callable
from contextvars import ContextVar

from ct_core.content import SaveEvent
from ct_core.eligibility.policy import EligibilityPolicy
from ct_core.localization.language import LanguageResolver
from ct_core.localization.registry_base import LocalizationRegistry, RegistryLookupError

logger = logging.getLogger(__name__)

SaveListener = Callable[[SaveEvent], object]

_duplicating: ContextVar[bool] = ContextVar("ct_duplicating", default=False)


class SaveEventDispatcher:
    def __init__(self) -> None:
        self._listeners: list[SaveListener] = []

    def subscribe(self, listener: SaveListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SaveListener) -> None:
        self._listeners.remove(listener)

    def dispatch(self, event: SaveEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class ContentDuplicator:
    """Creates language duplicates when a canonical origin is saved.

    Creating duplicates saves content again, so a call-scoped flag marks the
    duplication as in progress and nested save events are ignored.
    """

    def __init__(
        self,
        registry: LocalizationRegistry,
        languages: LanguageResolver,
        policy: EligibilityPolicy,
    ) -> None:
        self.registry = registry
        self.languages = languages
        self.policy = policy

    @staticmethod
    def in_progress() -> bool:
        return _duplicating.get()

    def __call__(self, event: SaveEvent) -> int:
        if event.is_revision or event.is_autosave or _duplicating.get():
            return 0

        # A save with no request language never duplicates.
        canonical = self.languages.canonical_language
        if self.registry.active_language_code() != canonical:
            return 0

        try:
            item = self.registry.get_item(event.item_id)
        except RegistryLookupError:
            return 0
        if not item.is_origin or item.language_code != canonical:
            return 0
        if not self.policy.is_type_eligible(item.content_type):
            return 0

        token = _duplicating.set(True)
        try:
            created = self.registry.make_duplicates(item.id)
        finally:
            _duplicating.reset(token)

        if created:
            logger.info(
                "Duplicated item %s into %s",
                item.id,
                ", ".join(duplicate.language_code for duplicate in created),
            )
        return len(created)
