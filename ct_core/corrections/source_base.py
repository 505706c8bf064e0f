from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CorrectionEntry:
    id: int
    source_text: str
    corrected_text: str


class CorrectionSource(ABC):
    @abstractmethod
    def entries(self) -> list[CorrectionEntry]:
        """Corrections in table order."""
