"""SQLite-backed repository for persistent quote storage.

Updates:
  v0.2.0 - 2026-09-14 - Add category and settings mixins.
  v0.1.0 - 2026-08-30 - Compose repository from base helpers and quote mixin.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .base import (
    RepositoryError,
    RepositoryNotFoundError,
    connect as _connect,
    ensure_directory as _ensure_directory,
)
from .categories import CategoryStoreMixin
from .maintenance import RepositoryMaintenanceMixin
from .quotes import QuoteStoreMixin
from .settings import SettingsStoreMixin


class QuoteRepository(
    RepositoryMaintenanceMixin,
    QuoteStoreMixin,
    CategoryStoreMixin,
    SettingsStoreMixin,
):
    """Compose repository mixins for SQLite-backed storage."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialise repository storage and ensure the schema exists."""
        self._db_path = Path(db_path)
        _ensure_directory(self._db_path)
        try:
            with _connect(self._db_path) as conn:
                self._ensure_schema(conn)
        except sqlite3.Error as exc:  # pragma: no cover - defensive
            raise RepositoryError("Failed to initialise SQLite schema") from exc

    @property
    def db_path(self) -> Path:
        return self._db_path


__all__ = [
    "QuoteRepository",
    "RepositoryError",
    "RepositoryNotFoundError",
    "_connect",
]
