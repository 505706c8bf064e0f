"""Local-first SQLite site implementing the engine's collaborators."""
