from __future__ import annotations

from abc import ABC, abstractmethod

from ct_core.eligibility.fields import FieldDefinition, SyncMode


class EligibilitySettings(ABC):
    @abstractmethod
    def type_sync_setting(self, content_type: str) -> SyncMode:
        ...

    @abstractmethod
    def field_auto_translate_flag(self, field: FieldDefinition) -> bool:
        ...

    @abstractmethod
    def ignore_list(self) -> set[str]:
        """Tokens of the form ``"{origin_id}_{field_key}"``."""

    @abstractmethod
    def fields_for_type(self, content_type: str) -> list[FieldDefinition]:
        ...
