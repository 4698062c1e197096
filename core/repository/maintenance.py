"""Schema bootstrap and maintenance helpers for the repository.

Updates:
  v0.2.0 - 2026-09-14 - Add quote_categories association table.
  v0.1.0 - 2026-08-30 - Extract schema management from the repository module.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from pathlib import Path

from .base import logger


class RepositoryMaintenanceMixin:
    """Tasks that create and migrate repository storage."""

    _db_path: Path

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        """Create required tables if they do not exist."""
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE COLLATE NOCASE
            );
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS quotes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                text TEXT NOT NULL,
                author TEXT,
                created_at TEXT NOT NULL
            );
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS quote_categories (
                quote_id INTEGER NOT NULL,
                category_id INTEGER NOT NULL,
                PRIMARY KEY (quote_id, category_id),
                FOREIGN KEY(quote_id) REFERENCES quotes(id) ON DELETE CASCADE,
                FOREIGN KEY(category_id) REFERENCES categories(id) ON DELETE CASCADE
            );
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_quote_categories_category "
            "ON quote_categories(category_id);"
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_quotes_created_at ON quotes(created_at);")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT
            );
            """
        )
        logger.debug("Ensured repository schema at %s", self._db_path)


__all__ = ["RepositoryMaintenanceMixin"]
