"""Editor-maintained correction overrides."""

from ct_core.corrections.correction_store import CorrectionStore
from ct_core.corrections.lookup import CorrectionLookup
from ct_core.corrections.normalize import normalize_source_text
from ct_core.corrections.source_base import CorrectionEntry, CorrectionSource

__all__ = [
    "CorrectionEntry",
    "CorrectionLookup",
    "CorrectionSource",
    "CorrectionStore",
    "normalize_source_text",
]
