"""Category management helpers for the Quote Wall service.

Updates:
  v0.1.0 - 2026-09-14 - Extract category APIs into mixin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import CategoryExistsError, CategoryNotFoundError, CategoryStorageError
from ..repository import RepositoryError, RepositoryNotFoundError

if TYPE_CHECKING:
    from models.category_model import Category

    from ..stores import SQLiteQuoteStore

__all__ = ["CategorySupport"]


class CategorySupport:
    """Mixin exposing category CRUD backed by the quote store."""

    _quote_store: SQLiteQuoteStore

    async def list_categories(self) -> list[Category]:
        """Return every category ordered by name."""
        try:
            return await self._quote_store.list_categories()
        except RepositoryError as exc:
            raise CategoryStorageError("Unable to list categories") from exc

    async def create_category(self, name: str) -> Category:
        """Create a category; names are unique ignoring case."""
        await self._ensure_name_available(name)
        try:
            return await self._quote_store.create_category(name)
        except RepositoryError as exc:
            raise CategoryStorageError(f"Unable to create category '{name}'") from exc

    async def rename_category(self, category_id: int, name: str) -> Category:
        await self._ensure_name_available(name, ignore_id=category_id)
        try:
            return await self._quote_store.rename_category(category_id, name)
        except RepositoryNotFoundError as exc:
            raise CategoryNotFoundError(f"Category {category_id} not found") from exc
        except RepositoryError as exc:
            raise CategoryStorageError(f"Unable to rename category {category_id}") from exc

    async def delete_category(self, category_id: int) -> None:
        """Delete a category; its quotes are kept without the association."""
        try:
            await self._quote_store.delete_category(category_id)
        except RepositoryNotFoundError as exc:
            raise CategoryNotFoundError(f"Category {category_id} not found") from exc
        except RepositoryError as exc:
            raise CategoryStorageError(f"Unable to delete category {category_id}") from exc

    async def _ensure_name_available(self, name: str, ignore_id: int | None = None) -> None:
        try:
            existing = await self._quote_store.find_category_by_name(name)
        except RepositoryError as exc:
            raise CategoryStorageError(f"Unable to look up category '{name}'") from exc
        if existing is not None and existing.id != ignore_id:
            raise CategoryExistsError(f"Category '{existing.name}' already exists")
