from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from ct_core.content import ContentItem, SaveEvent
from ct_core.localization.registry_base import (
    LanguageLink,
    LocalizationRegistry,
    RegistryLookupError,
)
from ct_core.site.config import SiteConfig

_active_language: ContextVar[str | None] = ContextVar("ct_active_language", default=None)

_ITEM_COLUMNS = "id, content_type, language_code, origin_id, exclude_from_translation"


def _utc_now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


def _row_to_item(row: Any) -> ContentItem:
    return ContentItem(
        id=int(row[0]),
        content_type=str(row[1]),
        language_code=str(row[2]),
        origin_id=int(row[3]) if row[3] is not None else None,
        exclude_from_translation=bool(int(row[4] or 0)),
    )


@contextmanager
def active_language(code: str | None) -> Iterator[None]:
    """Set the request language for the duration of a render."""

    token = _active_language.set(code)
    try:
        yield
    finally:
        _active_language.reset(token)


class SiteRegistry(LocalizationRegistry):
    """Localization registry backed by the site's ``content_items`` table."""

    def __init__(
        self,
        engine: Engine,
        config: SiteConfig,
        *,
        on_saved: Callable[[SaveEvent], None] | None = None,
    ) -> None:
        self.engine = engine
        self.config = config
        self.on_saved = on_saved

    def active_language_code(self) -> str | None:
        return _active_language.get()

    def active_languages(self) -> list[LanguageLink]:
        links = [LanguageLink(code=entry.code, url=entry.url) for entry in self.config.languages]
        return sorted(links, key=lambda link: link.code, reverse=True)

    def _fetch_item(self, connection: Connection, item_id: int) -> ContentItem:
        row = connection.execute(
            text(f"SELECT {_ITEM_COLUMNS} FROM content_items WHERE id = :id LIMIT 1"),
            {"id": item_id},
        ).first()
        if row is None:
            raise RegistryLookupError(f"Unknown content item: {item_id}")
        return _row_to_item(row)

    def get_item(self, item_id: int) -> ContentItem:
        with self.engine.connect() as connection:
            return self._fetch_item(connection, item_id)

    def language_of(self, item_id: int) -> str:
        return self.get_item(item_id).language_code

    def origin_of(self, item_id: int) -> int | None:
        return self.get_item(item_id).origin_id

    def variants_of(self, item_id: int) -> list[ContentItem]:
        with self.engine.connect() as connection:
            self._fetch_item(connection, item_id)
            rows = connection.execute(
                text(
                    f"""
                    SELECT {_ITEM_COLUMNS}
                    FROM content_items
                    WHERE origin_id = :origin_id
                    ORDER BY language_code DESC, id
                    """
                ),
                {"origin_id": item_id},
            ).all()
        return [_row_to_item(row) for row in rows]

    def add_item(
        self,
        *,
        content_type: str,
        language_code: str,
        title: str = "",
        body: str = "",
        origin_id: int | None = None,
        exclude_from_translation: bool = False,
        item_id: int | None = None,
    ) -> ContentItem:
        now = _utc_now_iso()
        with self.engine.begin() as connection:
            if origin_id is not None:
                origin = self._fetch_item(connection, origin_id)
                if origin.origin_id is not None:
                    raise ValueError(
                        f"Item {origin_id} is itself a variant and cannot be an origin."
                    )
            result = connection.execute(
                text(
                    """
                    INSERT INTO content_items(
                        id, content_type, language_code, origin_id,
                        exclude_from_translation, title, body, created_at, updated_at
                    ) VALUES (
                        :id, :content_type, :language_code, :origin_id,
                        :exclude_from_translation, :title, :body, :created_at, :updated_at
                    )
                    """
                ),
                {
                    "id": item_id,
                    "content_type": content_type,
                    "language_code": language_code,
                    "origin_id": origin_id,
                    "exclude_from_translation": 1 if exclude_from_translation else 0,
                    "title": title,
                    "body": body,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            new_id = item_id if item_id is not None else int(result.lastrowid)
            return self._fetch_item(connection, new_id)

    def item_text(self, item_id: int) -> tuple[str, str]:
        with self.engine.connect() as connection:
            row = connection.execute(
                text("SELECT title, body FROM content_items WHERE id = :id LIMIT 1"),
                {"id": item_id},
            ).first()
        if row is None:
            raise RegistryLookupError(f"Unknown content item: {item_id}")
        return str(row[0]), str(row[1])

    def save_item(
        self,
        item_id: int,
        *,
        title: str | None = None,
        body: str | None = None,
        is_revision: bool = False,
        is_autosave: bool = False,
    ) -> ContentItem:
        """Persist edits to an item and announce the save to listeners.

        Revision and autosave snapshots leave the live row untouched but are
        still announced, so listeners can decide to ignore them.
        """

        with self.engine.begin() as connection:
            item = self._fetch_item(connection, item_id)
            if not is_revision and not is_autosave:
                connection.execute(
                    text(
                        """
                        UPDATE content_items
                        SET
                            title = COALESCE(:title, title),
                            body = COALESCE(:body, body),
                            updated_at = :updated_at
                        WHERE id = :id
                        """
                    ),
                    {"id": item_id, "title": title, "body": body, "updated_at": _utc_now_iso()},
                )

        if self.on_saved is not None:
            self.on_saved(
                SaveEvent(item_id=item.id, is_revision=is_revision, is_autosave=is_autosave)
            )
        return item

    def make_duplicates(self, item_id: int) -> list[ContentItem]:
        origin = self.get_item(item_id)
        if origin.origin_id is not None:
            raise ValueError(f"Item {item_id} is a variant; only origins can be duplicated.")

        title, body = self.item_text(item_id)
        existing = {variant.language_code for variant in self.variants_of(item_id)}
        created: list[ContentItem] = []
        for link in self.active_languages():
            if link.code == origin.language_code or link.code in existing:
                continue
            created.append(
                self.add_item(
                    content_type=origin.content_type,
                    language_code=link.code,
                    title=title,
                    body=body,
                    origin_id=origin.id,
                )
            )

        for duplicate in created:
            self.save_item(duplicate.id)
        if created:
            # Re-saving the origin records the sync and announces another save.
            self.save_item(origin.id)
        return created
