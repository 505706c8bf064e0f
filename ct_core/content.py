from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ContentItem:
    id: int
    content_type: str
    language_code: str
    origin_id: int | None = None
    exclude_from_translation: bool = False

    @property
    def is_origin(self) -> bool:
        return self.origin_id is None

    @property
    def origin_key(self) -> int:
        """Id of the origin, or the item's own id when it is an origin."""
        return self.origin_id if self.origin_id is not None else self.id


@dataclass(slots=True, frozen=True)
class SaveEvent:
    item_id: int
    is_revision: bool = False
    is_autosave: bool = False
