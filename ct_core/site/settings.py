from __future__ import annotations

from collections.abc import Callable, Iterable
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ct_core.eligibility.fields import FieldDefinition, FieldKind, SyncMode
from ct_core.eligibility.settings_base import EligibilitySettings
from ct_core.site.config import SiteConfig

IgnoreSupplier = Callable[[], Iterable[str]]


class SiteSettings(EligibilitySettings):
    """Eligibility flags from ``config.yml`` and the ``field_definitions`` table.

    Extra ignore tokens can be contributed at runtime through ``ignore_suppliers``.
    """

    def __init__(
        self,
        engine: Engine,
        config: SiteConfig,
        *,
        ignore_suppliers: list[IgnoreSupplier] | None = None,
    ) -> None:
        self.engine = engine
        self.config = config
        self.ignore_suppliers: list[IgnoreSupplier] = list(ignore_suppliers or [])

    def type_sync_setting(self, content_type: str) -> SyncMode:
        raw = self.config.type_sync.get(content_type)
        if raw is None:
            return SyncMode.OFF
        return SyncMode.from_name(raw)

    def field_auto_translate_flag(self, field: FieldDefinition) -> bool:
        return field.auto_translate

    def ignore_list(self) -> set[str]:
        tokens = {token.strip() for token in self.config.ignore_specific if token.strip()}
        for supplier in self.ignore_suppliers:
            tokens.update(token.strip() for token in supplier() if token.strip())
        return tokens

    def fields_for_type(self, content_type: str) -> list[FieldDefinition]:
        with self.engine.connect() as connection:
            rows = connection.execute(
                text(
                    """
                    SELECT name, kind, auto_translate
                    FROM field_definitions
                    WHERE content_type = :content_type
                    ORDER BY name
                    """
                ),
                {"content_type": content_type},
            ).all()
        return [
            FieldDefinition(
                name=str(row[0]),
                kind=FieldKind(str(row[1])),
                auto_translate=bool(int(row[2] or 0)),
            )
            for row in rows
        ]

    def field_for_type(self, content_type: str, name: str) -> FieldDefinition | None:
        for field in self.fields_for_type(content_type):
            if field.name == name:
                return field
        return None

    def define_field(self, content_type: str, field: FieldDefinition) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text(
                    """
                    INSERT INTO field_definitions(id, content_type, name, kind, auto_translate)
                    VALUES (:id, :content_type, :name, :kind, :auto_translate)
                    ON CONFLICT(content_type, name) DO UPDATE SET
                        kind = excluded.kind,
                        auto_translate = excluded.auto_translate
                    """
                ),
                {
                    "id": str(uuid4()),
                    "content_type": content_type,
                    "name": field.name,
                    "kind": field.kind.value,
                    "auto_translate": 1 if field.auto_translate else 0,
                },
            )
