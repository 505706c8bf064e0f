from __future__ import annotations

from sqlmodel import Field, SQLModel


class CorrectionRow(SQLModel, table=True):
    __tablename__ = "corrections"

    id: int | None = Field(default=None, primary_key=True)
    source_text: str
    corrected_text: str
    created_at: str
