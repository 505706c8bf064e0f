from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ct_core.corrections.source_base import CorrectionEntry, CorrectionSource
from ct_core.db.models import CorrectionRow
from ct_core.db.schema import initialize_database


def _utc_now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


def _row_to_entry(row: CorrectionRow) -> CorrectionEntry:
    return CorrectionEntry(
        id=int(row.id or 0),
        source_text=row.source_text,
        corrected_text=row.corrected_text,
    )


class CorrectionStore(CorrectionSource):
    """The site's ``corrections`` table, read in insertion order."""

    def __init__(self, db_path: Path | None = None, *, engine: Engine | None = None) -> None:
        if engine is None:
            if db_path is None:
                raise ValueError("db_path is required when engine is not provided")
            engine = initialize_database(Path(db_path))
        self.engine = engine

    def entries(self) -> list[CorrectionEntry]:
        with Session(self.engine) as session:
            rows = session.exec(select(CorrectionRow).order_by(CorrectionRow.id)).all()
            return [_row_to_entry(row) for row in rows]

    def add(self, source_text: str, corrected_text: str) -> CorrectionEntry:
        if not source_text.strip():
            raise ValueError("Correction source text must not be empty.")
        row = CorrectionRow(
            source_text=source_text,
            corrected_text=corrected_text,
            created_at=_utc_now_iso(),
        )
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return _row_to_entry(row)

    def delete(self, correction_id: int) -> bool:
        with Session(self.engine) as session:
            row = session.get(CorrectionRow, correction_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True
