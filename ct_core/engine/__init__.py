"""Resolution pipeline and content-save handling."""

from ct_core.engine.orchestrator import TranslationEngine
from ct_core.engine.save_events import ContentDuplicator, SaveEventDispatcher

__all__ = ["ContentDuplicator", "SaveEventDispatcher", "TranslationEngine"]
