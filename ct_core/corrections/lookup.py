from __future__ import annotations

from ct_core.corrections.normalize import normalize_source_text
from ct_core.corrections.source_base import CorrectionSource


class CorrectionLookup:
    """Exact, normalized match of source text against editor corrections.

    Corrections apply to every target language. The table is re-read on each
    lookup so edits take effect on the next render.
    """

    def __init__(self, source: CorrectionSource) -> None:
        self.source = source

    def lookup(self, text: str) -> str | None:
        needle = normalize_source_text(text)
        if not needle:
            return None
        for entry in self.source.entries():
            if normalize_source_text(entry.source_text) == needle:
                return entry.corrected_text
        return None
