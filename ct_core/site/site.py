from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Engine

from ct_core.corrections.correction_store import CorrectionStore
from ct_core.db.schema import initialize_database
from ct_core.engine.orchestrator import TranslationEngine
from ct_core.engine.save_events import ContentDuplicator, SaveEventDispatcher
from ct_core.site.create_site import SiteInfo, load_site_info
from ct_core.site.registry import SiteRegistry
from ct_core.site.settings import SiteSettings
from ct_core.site.store import SqliteContentStore
from ct_core.translator.factory import build_provider
from ct_core.translator.provider_base import TranslatorProvider


@dataclass(slots=True)
class Site:
    """A site's collaborators wired to one translation engine."""

    info: SiteInfo
    db_engine: Engine
    store: SqliteContentStore
    registry: SiteRegistry
    settings: SiteSettings
    corrections: CorrectionStore
    events: SaveEventDispatcher
    engine: TranslationEngine
    duplicator: ContentDuplicator

    def close(self) -> None:
        self.db_engine.dispose()

    def __enter__(self) -> Site:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_site(
    slug: str,
    *,
    root: Path | None = None,
    provider: TranslatorProvider | None = None,
    duplicate_on_save: bool = True,
) -> Site:
    info = load_site_info(slug, root=root)
    db_engine = initialize_database(info.db_path)
    events = SaveEventDispatcher()

    store = SqliteContentStore(engine=db_engine)
    registry = SiteRegistry(db_engine, info.config, on_saved=events.dispatch)
    settings = SiteSettings(db_engine, info.config)
    corrections = CorrectionStore(engine=db_engine)
    engine = TranslationEngine(
        store=store,
        registry=registry,
        settings=settings,
        provider=provider if provider is not None else build_provider(info.config.translator),
        corrections=corrections,
        canonical_language=info.config.canonical_language,
    )
    duplicator = ContentDuplicator(registry, engine.languages, engine.policy)

    events.subscribe(engine.handle_save)
    if duplicate_on_save:
        events.subscribe(duplicator)

    return Site(
        info=info,
        db_engine=db_engine,
        store=store,
        registry=registry,
        settings=settings,
        corrections=corrections,
        events=events,
        engine=engine,
        duplicator=duplicator,
    )
