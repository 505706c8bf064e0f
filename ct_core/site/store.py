from __future__ import annotations

from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ct_core.cache.store_base import ContentStore
from ct_core.db.schema import initialize_database


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqliteContentStore(ContentStore):
    """Item meta and options tables of a site database."""

    def __init__(self, db_path: Path | None = None, *, engine: Engine | None = None) -> None:
        if engine is None:
            if db_path is None:
                raise ValueError("db_path is required when engine is not provided")
            engine = initialize_database(Path(db_path))
        self.engine = engine

    def get_item_meta(self, item_id: int, key: str) -> str | None:
        with self.engine.connect() as connection:
            value = connection.execute(
                text(
                    """
                    SELECT meta_value
                    FROM item_meta
                    WHERE item_id = :item_id AND meta_key = :meta_key
                    LIMIT 1
                    """
                ),
                {"item_id": item_id, "meta_key": key},
            ).scalar_one_or_none()
        return None if value is None else str(value)

    def set_item_meta(self, item_id: int, key: str, value: str) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text(
                    """
                    INSERT INTO item_meta(item_id, meta_key, meta_value)
                    VALUES (:item_id, :meta_key, :meta_value)
                    ON CONFLICT(item_id, meta_key) DO UPDATE SET meta_value=excluded.meta_value
                    """
                ),
                {"item_id": item_id, "meta_key": key, "meta_value": value},
            )

    def delete_item_meta_by_prefix(self, item_id: int, prefix: str) -> int:
        with self.engine.begin() as connection:
            result = connection.execute(
                text(
                    """
                    DELETE FROM item_meta
                    WHERE item_id = :item_id AND meta_key LIKE :pattern ESCAPE '\\'
                    """
                ),
                {"item_id": item_id, "pattern": f"{_escape_like(prefix)}%"},
            )
        return int(result.rowcount or 0)

    def get_option(self, key: str) -> str | None:
        with self.engine.connect() as connection:
            value = connection.execute(
                text("SELECT value FROM options WHERE key = :key LIMIT 1"),
                {"key": key},
            ).scalar_one_or_none()
        return None if value is None else str(value)

    def set_option(self, key: str, value: str) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text(
                    "INSERT INTO options(key, value) VALUES (:key, :value) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value"
                ),
                {"key": key, "value": value},
            )

    def delete_options_by_prefix(self, prefix: str) -> int:
        with self.engine.begin() as connection:
            result = connection.execute(
                text("DELETE FROM options WHERE key LIKE :pattern ESCAPE '\\'"),
                {"pattern": f"{_escape_like(prefix)}%"},
            )
        return int(result.rowcount or 0)
