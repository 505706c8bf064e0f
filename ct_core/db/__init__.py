"""Database helpers for per-site SQLite files."""

from ct_core.db.migrations import migrate_to_latest
from ct_core.db.schema import initialize_database

__all__ = ["initialize_database", "migrate_to_latest"]
