from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine

from ct_core.db.engine import create_sqlite_engine
from ct_core.db.migrations import migrate_to_latest


def initialize_database(db_path: Path) -> Engine:
    engine = create_sqlite_engine(db_path)
    migrate_to_latest(engine)
    return engine
