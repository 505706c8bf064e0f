from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class SyncMode(IntEnum):
    """Registry sync option for a content type."""

    OFF = 0
    MANUAL = 1
    AUTO = 2

    @classmethod
    def from_name(cls, value: str) -> SyncMode:
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unsupported sync mode: {value!r}") from exc


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    LINK = "link"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    IMAGE = "image"
    RELATIONSHIP = "relationship"


@dataclass(slots=True, frozen=True)
class FieldDefinition:
    name: str
    kind: FieldKind = FieldKind.TEXT
    auto_translate: bool = False


def is_textual(kind: FieldKind) -> bool:
    match kind:
        case FieldKind.TEXT | FieldKind.TEXTAREA | FieldKind.LINK | FieldKind.RICH_TEXT:
            return True
        case FieldKind.NUMBER | FieldKind.IMAGE | FieldKind.RELATIONSHIP:
            return False
    return False
