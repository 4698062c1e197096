"""Key/value settings persistence helpers.

Updates:
  v0.1.1 - 2026-09-06 - Write several keys in one transaction for rotation state.
  v0.1.0 - 2026-08-30 - Extract settings table access into mixin.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from .base import RepositoryError, connect as _connect, placeholders

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class SettingsStoreMixin:
    """Accessors for the ``settings`` key/value table."""

    _db_path: Path

    def get_setting(self, key: str) -> str | None:
        """Return the stored value for *key*, or ``None`` when unset."""
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM settings WHERE key = ?;",
                    (str(key),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to read setting '{key}'") from exc
        if row is None:
            return None
        return row["value"]

    def set_setting(self, key: str, value: str) -> None:
        self.set_settings({key: value})

    def set_settings(self, values: Mapping[str, str]) -> None:
        """Persist every entry of *values* atomically."""
        if not values:
            return
        try:
            with _connect(self._db_path) as conn:
                conn.executemany(
                    "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?);",
                    [(str(key), str(value)) for key, value in values.items()],
                )
        except sqlite3.Error as exc:
            keys = ", ".join(sorted(values))
            raise RepositoryError(f"Failed to write settings {keys}") from exc

    def delete_setting(self, key: str) -> None:
        self.delete_settings((key,))

    def delete_settings(self, keys: Iterable[str]) -> None:
        """Remove every key in *keys*; missing keys are ignored."""
        key_list = [str(key) for key in keys]
        if not key_list:
            return
        try:
            with _connect(self._db_path) as conn:
                conn.execute(
                    f"DELETE FROM settings WHERE key IN ({placeholders(len(key_list))});",
                    key_list,
                )
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete settings {', '.join(key_list)}") from exc


__all__ = ["SettingsStoreMixin"]
