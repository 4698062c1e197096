"""Async store protocols and SQLite-backed implementations.

The rotation engine and cache coordinator only talk to the narrow protocols
defined here. ``SQLiteQuoteStore`` and ``SQLiteSettingsStore`` adapt the
synchronous :class:`core.repository.QuoteRepository` by running each call in a
worker thread so the event loop never blocks on SQLite I/O.

Updates:
  v0.2.0 - 2026-09-14 - Expose category CRUD through the async quote store.
  v0.1.1 - 2026-09-06 - Persist rotation id/date pairs in a single transaction.
  v0.1.0 - 2026-08-30 - Introduce QuoteStore/SettingsStore protocols and SQLite adapters.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from models.wallpaper import WallpaperStyle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.category_model import Category
    from models.quote_model import Quote

    from .repository import QuoteRepository

logger = logging.getLogger("quote_wall.stores")


class SettingKey(StrEnum):
    """Keys stored in the ``settings`` table."""

    CURRENT_QUOTE_ID = "current_quote_id"
    LAST_QUOTE_DATE = "last_quote_date"
    DARK_BACKGROUND = "dark_background"


@runtime_checkable
class QuoteStore(Protocol):
    """Read access to the quote library used by rotation and caching."""

    async def count_quotes(self) -> int: ...

    async def get_quote_by_id(self, quote_id: int) -> Quote | None: ...

    async def get_random_quote(self) -> Quote | None: ...

    async def get_random_quote_excluding(self, quote_id: int) -> Quote | None:
        """Return a random other quote, or the excluded one when it is alone."""
        ...

    async def list_all_quotes(self) -> list[Quote]: ...


@runtime_checkable
class SettingsStore(Protocol):
    """Key/value persistence with typed accessors for rotation state."""

    async def get_setting(self, key: str) -> str | None: ...

    async def set_setting(self, key: str, value: str) -> None: ...

    async def delete_setting(self, key: str) -> None: ...

    async def get_current_quote_id(self) -> int | None: ...

    async def get_last_quote_date(self) -> str | None: ...

    async def set_rotation_state(self, quote_id: int, quote_date: str) -> None:
        """Persist the active quote id and its selection date together."""
        ...

    async def clear_current_quote_id(self) -> None: ...

    async def get_wallpaper_style(self) -> WallpaperStyle: ...

    async def set_wallpaper_style(self, style: WallpaperStyle) -> None: ...


def parse_quote_id(value: str | None) -> int | None:
    """Return the integer stored as text in *value*, ignoring malformed entries."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        logger.warning("Ignoring malformed %s setting: %r", SettingKey.CURRENT_QUOTE_ID, value)
        return None


class SQLiteQuoteStore:
    """Async facade over the quote and category parts of the repository."""

    def __init__(self, repository: QuoteRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> QuoteRepository:
        return self._repository

    async def count_quotes(self) -> int:
        return await asyncio.to_thread(self._repository.count_quotes)

    async def get_quote_by_id(self, quote_id: int) -> Quote | None:
        return await asyncio.to_thread(self._repository.get_quote, quote_id)

    async def get_random_quote(self) -> Quote | None:
        return await asyncio.to_thread(self._repository.get_random_quote)

    async def get_random_quote_excluding(self, quote_id: int) -> Quote | None:
        return await asyncio.to_thread(self._repository.get_random_quote_excluding, quote_id)

    async def list_all_quotes(self) -> list[Quote]:
        return await asyncio.to_thread(self._repository.list_quotes)

    async def list_quotes(self, category_id: int | None = None) -> list[Quote]:
        return await asyncio.to_thread(self._repository.list_quotes, category_id)

    async def add_quote(self, quote: Quote) -> Quote:
        return await asyncio.to_thread(self._repository.add_quote, quote)

    async def add_quotes(self, quotes: Sequence[Quote]) -> list[Quote]:
        return await asyncio.to_thread(self._repository.add_quotes, quotes)

    async def update_quote(self, quote: Quote) -> Quote:
        return await asyncio.to_thread(self._repository.update_quote, quote)

    async def delete_quote(self, quote_id: int) -> None:
        await asyncio.to_thread(self._repository.delete_quote, quote_id)

    async def quote_text_exists(self, text: str) -> bool:
        return await asyncio.to_thread(self._repository.quote_text_exists, text)

    async def create_category(self, name: str) -> Category:
        return await asyncio.to_thread(self._repository.create_category, name)

    async def rename_category(self, category_id: int, name: str) -> Category:
        return await asyncio.to_thread(self._repository.rename_category, category_id, name)

    async def delete_category(self, category_id: int) -> None:
        await asyncio.to_thread(self._repository.delete_category, category_id)

    async def get_category(self, category_id: int) -> Category | None:
        return await asyncio.to_thread(self._repository.get_category, category_id)

    async def find_category_by_name(self, name: str) -> Category | None:
        return await asyncio.to_thread(self._repository.find_category_by_name, name)

    async def list_categories(self) -> list[Category]:
        return await asyncio.to_thread(self._repository.list_categories)


class SQLiteSettingsStore:
    """Async facade over the repository ``settings`` table."""

    def __init__(self, repository: QuoteRepository) -> None:
        self._repository = repository

    async def get_setting(self, key: str) -> str | None:
        return await asyncio.to_thread(self._repository.get_setting, key)

    async def set_setting(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._repository.set_setting, key, value)

    async def delete_setting(self, key: str) -> None:
        await asyncio.to_thread(self._repository.delete_setting, key)

    async def get_current_quote_id(self) -> int | None:
        return parse_quote_id(await self.get_setting(SettingKey.CURRENT_QUOTE_ID))

    async def get_last_quote_date(self) -> str | None:
        return await self.get_setting(SettingKey.LAST_QUOTE_DATE)

    async def set_rotation_state(self, quote_id: int, quote_date: str) -> None:
        await asyncio.to_thread(
            self._repository.set_settings,
            {
                SettingKey.CURRENT_QUOTE_ID: str(quote_id),
                SettingKey.LAST_QUOTE_DATE: quote_date,
            },
        )

    async def clear_current_quote_id(self) -> None:
        await self.delete_setting(SettingKey.CURRENT_QUOTE_ID)

    async def get_wallpaper_style(self) -> WallpaperStyle:
        # dark unless explicitly disabled
        value = await self.get_setting(SettingKey.DARK_BACKGROUND)
        return WallpaperStyle.from_dark_flag(value != "false")

    async def set_wallpaper_style(self, style: WallpaperStyle) -> None:
        await self.set_setting(SettingKey.DARK_BACKGROUND, "true" if style.is_dark else "false")


__all__ = [
    "QuoteStore",
    "SQLiteQuoteStore",
    "SQLiteSettingsStore",
    "SettingKey",
    "SettingsStore",
    "parse_quote_id",
]
