from __future__ import annotations

from collections.abc import Iterable

from ct_core.constants import CONTENT_FIELD_KEY
from ct_core.content import ContentItem
from ct_core.eligibility.fields import FieldDefinition, SyncMode, is_textual
from ct_core.eligibility.settings_base import EligibilitySettings

ELIGIBLE_SYNC_MODES = (SyncMode.MANUAL, SyncMode.AUTO)


def ignore_token(origin_id: int, field_key: str) -> str:
    return f"{origin_id}_{field_key}"


class EligibilityPolicy:
    def __init__(self, settings: EligibilitySettings) -> None:
        self.settings = settings

    def is_type_eligible(self, content_type: str) -> bool:
        return self.settings.type_sync_setting(content_type) in ELIGIBLE_SYNC_MODES

    def is_field_eligible(self, field: FieldDefinition, item: ContentItem) -> bool:
        if not is_textual(field.kind):
            return False
        if not self.settings.field_auto_translate_flag(field):
            return False
        return self.is_type_eligible(item.content_type)

    def is_excluded(
        self,
        item: ContentItem,
        field_key: str,
        ignore_list: Iterable[str] | None = None,
    ) -> bool:
        """Return True when an editor opted this (item, field) out of translation.

        ``ignore_list`` holds ``"{origin_id}_{field_key}"`` tokens and defaults
        to the settings' list. The per-item exclude flag covers the body only.
        """
        tokens = set(ignore_list) if ignore_list is not None else self.settings.ignore_list()
        if ignore_token(item.origin_key, field_key) in tokens:
            return True
        return field_key == CONTENT_FIELD_KEY and item.exclude_from_translation

    def translatable_fields(self, item: ContentItem) -> list[str]:
        return [
            field.name
            for field in self.settings.fields_for_type(item.content_type)
            if self.is_field_eligible(field, item)
        ]
