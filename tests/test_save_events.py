from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from ct_core.content import SaveEvent
from ct_core.engine.save_events import ContentDuplicator, SaveEventDispatcher
from ct_core.site.create_site import create_site
from ct_core.site.registry import active_language
from ct_core.site.site import Site, open_site
from ct_core.translator.provider_base import TranslatorProvider


class _CountingProvider(TranslatorProvider):
    def __init__(self) -> None:
        self.calls = 0

    def translate(self, *, text: str, source_language: str, target_language: str) -> str:
        self.calls += 1
        return f"{target_language}:{text}"


def _open(tmp_path: Path, provider: TranslatorProvider, *, duplicate_on_save: bool) -> Site:
    sites_root = tmp_path / "sites"
    created = create_site(
        "Save Site",
        languages=["fr", "de"],
        type_sync={"page": "auto", "note": "off"},
        root=sites_root,
    )
    return open_site(
        created.slug,
        root=sites_root,
        provider=provider,
        duplicate_on_save=duplicate_on_save,
    )


@pytest.fixture
def provider() -> _CountingProvider:
    return _CountingProvider()


@pytest.fixture
def site(tmp_path: Path, provider: _CountingProvider) -> Iterator[Site]:
    with _open(tmp_path, provider, duplicate_on_save=False) as opened:
        yield opened


def _variant_pair(site: Site, title: str) -> tuple[int, int]:
    origin = site.registry.add_item(content_type="page", language_code="en", title=title)
    variant = site.registry.add_item(
        content_type="page",
        language_code="fr",
        title=title,
        origin_id=origin.id,
    )
    return origin.id, variant.id


def test_invalidation_is_scoped_to_saved_item(site: Site, provider: _CountingProvider) -> None:
    _, item_a = _variant_pair(site, "About")
    _, item_b = _variant_pair(site, "Contact")
    a = site.registry.get_item(item_a)
    b = site.registry.get_item(item_b)

    with active_language("fr"):
        site.engine.resolve("About", a, "title")
        site.engine.resolve("Contact", b, "title")
    assert provider.calls == 2

    site.engine.handle_save(SaveEvent(item_id=item_a))

    assert site.engine.cache.get(a, "en", "fr", "title") is None
    assert site.engine.cache.get(b, "en", "fr", "title") == "fr:Contact"

    with active_language("fr"):
        assert site.engine.resolve("About", a, "title") == "fr:About"
        site.engine.resolve("Contact", b, "title")
    assert provider.calls == 3


def test_revision_save_keeps_live_cache(site: Site) -> None:
    _, variant_id = _variant_pair(site, "About")
    variant = site.registry.get_item(variant_id)
    site.engine.cache.put(variant, "en", "fr", "title", "A propos")

    site.registry.save_item(variant_id, title="Draft", is_revision=True)
    site.registry.save_item(variant_id, is_autosave=True)
    assert site.engine.handle_save(SaveEvent(item_id=variant_id, is_revision=True)) == 0

    assert site.engine.cache.get(variant, "en", "fr", "title") == "A propos"
    assert site.registry.item_text(variant_id)[0] == "About"

    site.registry.save_item(variant_id, title="About us")

    assert site.engine.cache.get(variant, "en", "fr", "title") is None
    assert site.registry.item_text(variant_id)[0] == "About us"


def test_saving_origin_clears_variant_caches(site: Site) -> None:
    origin_id, variant_id = _variant_pair(site, "About")
    variant = site.registry.get_item(variant_id)
    site.engine.cache.put(variant, "en", "fr", "title", "A propos")
    site.engine.cache.put(variant, "en", "fr", "content", "Texte")

    site.registry.save_item(origin_id, title="About us")

    assert site.engine.cache.get(variant, "en", "fr", "title") is None
    assert site.engine.cache.get(variant, "en", "fr", "content") is None


def test_save_of_unknown_item_is_ignored(site: Site) -> None:
    assert site.engine.handle_save(SaveEvent(item_id=404)) == 0


def test_dispatcher_fans_out_in_subscription_order() -> None:
    dispatcher = SaveEventDispatcher()
    seen: list[tuple[str, int]] = []

    def first(event: SaveEvent) -> None:
        seen.append(("first", event.item_id))

    dispatcher.subscribe(first)
    dispatcher.subscribe(lambda event: seen.append(("second", event.item_id)))
    dispatcher.dispatch(SaveEvent(item_id=1))
    dispatcher.unsubscribe(first)
    dispatcher.dispatch(SaveEvent(item_id=2))

    assert seen == [("first", 1), ("second", 1), ("second", 2)]


def test_canonical_save_creates_duplicates_once(tmp_path: Path, provider: _CountingProvider) -> None:
    with _open(tmp_path, provider, duplicate_on_save=True) as site:
        nested: list[bool] = []
        site.events.subscribe(lambda event: nested.append(ContentDuplicator.in_progress()))
        origin = site.registry.add_item(content_type="page", language_code="en", title="Welcome")

        with active_language("en"):
            site.registry.save_item(origin.id)

        variants = site.registry.variants_of(origin.id)
        assert sorted(variant.language_code for variant in variants) == ["de", "fr"]
        assert all(variant.origin_id == origin.id for variant in variants)
        assert site.registry.item_text(variants[0].id) == ("Welcome", "")

        # two duplicate saves plus the origin re-save happen inside the guard
        assert nested == [True, True, True, False]
        assert ContentDuplicator.in_progress() is False

        with active_language("en"):
            site.registry.save_item(origin.id)
        assert len(site.registry.variants_of(origin.id)) == 2


def test_duplication_skips_non_canonical_requests_and_ineligible_types(
    tmp_path: Path,
    provider: _CountingProvider,
) -> None:
    with _open(tmp_path, provider, duplicate_on_save=True) as site:
        page = site.registry.add_item(content_type="page", language_code="en")
        note = site.registry.add_item(content_type="note", language_code="en")
        french = site.registry.add_item(content_type="page", language_code="fr")

        with active_language("fr"):
            site.registry.save_item(page.id)
        with active_language("en"):
            site.registry.save_item(note.id)
            site.registry.save_item(french.id)
            site.registry.save_item(page.id, is_revision=True)

        assert site.registry.variants_of(page.id) == []
        assert site.registry.variants_of(note.id) == []
        assert site.registry.variants_of(french.id) == []


def test_save_without_request_language_creates_no_duplicates(
    tmp_path: Path,
    provider: _CountingProvider,
) -> None:
    with _open(tmp_path, provider, duplicate_on_save=True) as site:
        origin = site.registry.add_item(content_type="page", language_code="en", title="Welcome")

        assert site.registry.active_language_code() is None
        site.registry.save_item(origin.id)

        assert site.registry.variants_of(origin.id) == []
