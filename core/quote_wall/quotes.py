"""Quote CRUD helpers for the Quote Wall service.

Edits and deletions drop the cached wallpapers of the affected quote so the
next generation pass renders the new text.

Updates:
  v0.1.2 - 2026-10-17 - Report cache removal failures as storage errors.
  v0.1.1 - 2026-09-21 - Invalidate cached wallpapers on edit and delete.
  v0.1.0 - 2026-09-14 - Extract quote APIs into mixin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.quote_model import Quote

from ..exceptions import QuoteNotFoundError, QuoteStorageError
from ..repository import RepositoryError, RepositoryNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..stores import SQLiteQuoteStore
    from ..wallpaper_cache import WallpaperCacheCoordinator

__all__ = ["QuoteSupport"]


class QuoteSupport:
    """Mixin exposing quote CRUD with cache invalidation."""

    _quote_store: SQLiteQuoteStore
    _coordinator: WallpaperCacheCoordinator

    async def add_quote(
        self,
        text: str,
        author: str | None = None,
        category_ids: Sequence[int] = (),
    ) -> Quote:
        """Store a new quote; raises ``ValueError`` for empty text."""
        quote = Quote(id=None, text=text, author=author, category_ids=list(category_ids))
        try:
            return await self._quote_store.add_quote(quote)
        except RepositoryError as exc:
            raise QuoteStorageError(f"Unable to add quote: {exc}") from exc

    async def get_quote(self, quote_id: int) -> Quote:
        try:
            quote = await self._quote_store.get_quote_by_id(quote_id)
        except RepositoryError as exc:
            raise QuoteStorageError(f"Unable to load quote {quote_id}") from exc
        if quote is None:
            raise QuoteNotFoundError(f"Quote {quote_id} not found")
        return quote

    async def list_quotes(self, category_id: int | None = None) -> list[Quote]:
        """Return quotes newest first, optionally limited to one category."""
        try:
            return await self._quote_store.list_quotes(category_id)
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to list quotes") from exc

    async def update_quote(self, quote: Quote) -> Quote:
        """Persist changes to *quote* and drop its cached wallpapers."""
        if quote.id is None:
            raise QuoteNotFoundError("Quote has no identifier")
        try:
            updated = await self._quote_store.update_quote(quote)
        except RepositoryNotFoundError as exc:
            raise QuoteNotFoundError(f"Quote {quote.id} not found") from exc
        except RepositoryError as exc:
            raise QuoteStorageError(f"Unable to update quote {quote.id}: {exc}") from exc
        await self._drop_cached(quote.id)
        return updated

    async def delete_quote(self, quote_id: int) -> None:
        """Delete a quote and its cached wallpapers."""
        try:
            await self._quote_store.delete_quote(quote_id)
        except RepositoryNotFoundError as exc:
            raise QuoteNotFoundError(f"Quote {quote_id} not found") from exc
        except RepositoryError as exc:
            raise QuoteStorageError(f"Unable to delete quote {quote_id}") from exc
        await self._drop_cached(quote_id)

    async def _drop_cached(self, quote_id: int) -> None:
        try:
            await self._coordinator.invalidate(quote_id)
        except OSError as exc:
            raise QuoteStorageError(
                f"Quote {quote_id} saved but its cached wallpapers could not be removed: {exc}"
            ) from exc
