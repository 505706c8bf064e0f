from __future__ import annotations

from typing import Any

from ct_core.constants import CONTENT_FIELD_KEY, TITLE_FIELD_KEY
from ct_core.content import ContentItem
from ct_core.eligibility.fields import FieldDefinition
from ct_core.engine.orchestrator import TranslationEngine
from ct_core.localization.registry_base import RegistryLookupError


class RenderFilters:
    """Output filters for titles, bodies and custom fields."""

    def __init__(self, engine: TranslationEngine, *, show_original: bool = False) -> None:
        self.engine = engine
        self.show_original = show_original

    def title(self, text: str, item: ContentItem | None) -> str:
        return self.engine.resolve(text, item, TITLE_FIELD_KEY, show_original=self.show_original)

    def body(self, text: str, item: ContentItem | None) -> str:
        return self.engine.resolve(text, item, CONTENT_FIELD_KEY, show_original=self.show_original)

    def custom_field(self, value: Any, item: ContentItem | None, field: FieldDefinition) -> Any:
        return self.engine.resolve_field(value, item, field, show_original=self.show_original)

    def menu_title(self, text: str, item_id: int | None) -> str:
        if item_id is None:
            return text
        try:
            item = self.engine.registry.get_item(item_id)
        except RegistryLookupError:
            return text
        return self.title(text, item)
