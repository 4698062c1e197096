"""Category persistence helpers.

Updates:
  v0.1.0 - 2026-09-14 - Extract category CRUD into mixin.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from models.category_model import Category, normalise_category_name

from .base import RepositoryError, RepositoryNotFoundError, connect as _connect


class CategoryStoreMixin:
    """CRUD helpers for quote categories."""

    _db_path: Path

    def create_category(self, name: str) -> Category:
        """Insert a new category and return it with its identifier."""
        category = Category(id=None, name=name)
        try:
            with _connect(self._db_path) as conn:
                cursor = conn.execute(
                    "INSERT INTO categories (name) VALUES (?);",
                    (category.name,),
                )
        except sqlite3.IntegrityError as exc:
            raise RepositoryError(f"Category '{category.name}' already exists") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert category '{category.name}'") from exc
        return Category(id=int(cursor.lastrowid or 0), name=category.name)

    def rename_category(self, category_id: int, name: str) -> Category:
        """Rename an existing category."""
        category = Category(id=category_id, name=name)
        try:
            with _connect(self._db_path) as conn:
                updated = conn.execute(
                    "UPDATE categories SET name = ? WHERE id = ?;",
                    (category.name, category_id),
                ).rowcount
        except sqlite3.IntegrityError as exc:
            raise RepositoryError(f"Category '{category.name}' already exists") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to rename category {category_id}") from exc
        if updated == 0:
            raise RepositoryNotFoundError(f"Category {category_id} not found")
        return category

    def delete_category(self, category_id: int) -> None:
        """Delete a category; quotes keep existing without the association."""
        try:
            with _connect(self._db_path) as conn:
                deleted = conn.execute(
                    "DELETE FROM categories WHERE id = ?;",
                    (category_id,),
                ).rowcount
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete category {category_id}") from exc
        if deleted == 0:
            raise RepositoryNotFoundError(f"Category {category_id} not found")

    def get_category(self, category_id: int) -> Category | None:
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT id, name FROM categories WHERE id = ?;",
                    (category_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to load category {category_id}") from exc
        return Category.from_record(dict(row)) if row else None

    def find_category_by_name(self, name: str) -> Category | None:
        """Return the category whose name matches *name* ignoring case."""
        cleaned = normalise_category_name(name)
        if not cleaned:
            return None
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT id, name FROM categories WHERE name = ? COLLATE NOCASE;",
                    (cleaned,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to look up category '{cleaned}'") from exc
        return Category.from_record(dict(row)) if row else None

    def list_categories(self) -> list[Category]:
        """Return categories ordered alphabetically."""
        try:
            with _connect(self._db_path) as conn:
                rows = conn.execute(
                    "SELECT id, name FROM categories ORDER BY name COLLATE NOCASE ASC;"
                ).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list categories") from exc
        return [Category.from_record(dict(row)) for row in rows]


__all__ = ["CategoryStoreMixin"]
