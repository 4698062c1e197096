"""Shared repository helpers and error hierarchy.

Updates:
  v0.1.1 - 2026-09-14 - Add placeholder helper for IN clauses.
  v0.1.0 - 2026-08-30 - Extract logger, connection helpers, and exceptions.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("quote_wall.repository")


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RepositoryNotFoundError(RepositoryError):
    """Raised when a requested record cannot be located."""


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection."""
    conn = sqlite3.connect(str(db_path), detect_types=sqlite3.PARSE_DECLTYPES)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


def placeholders(count: int) -> str:
    """Return ``?, ?, ...`` with *count* entries for parameterised IN clauses."""
    return ", ".join("?" for _ in range(count))


__all__ = [
    "RepositoryError",
    "RepositoryNotFoundError",
    "connect",
    "ensure_directory",
    "logger",
    "placeholders",
]
