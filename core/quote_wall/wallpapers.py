"""Daily quote, style preference and wallpaper cache APIs.

Updates:
  v0.2.1 - 2026-10-17 - Add missing_wallpapers; wrap cache removal errors.
  v0.2.0 - 2026-09-28 - Guard generate_missing against overlapping runs.
  v0.1.0 - 2026-09-21 - Extract rotation and wallpaper APIs into mixin.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.wallpaper import WallpaperStyle

from ..exceptions import QuoteStorageError
from ..repository import RepositoryError

if TYPE_CHECKING:
    from pathlib import Path

    from models.quote_model import Quote
    from models.rotation_state import RotationState

    from ..rotation import RotationEngine
    from ..stores import SQLiteSettingsStore
    from ..wallpaper_cache import WallpaperCacheCoordinator

__all__ = ["WallpaperSupport"]

logger = logging.getLogger("quote_wall.service")


class WallpaperSupport:
    """Mixin exposing rotation, style and cache operations."""

    _settings_store: SQLiteSettingsStore
    _engine: RotationEngine
    _coordinator: WallpaperCacheCoordinator
    _generating: bool

    async def get_style(self) -> WallpaperStyle:
        try:
            return await self._settings_store.get_wallpaper_style()
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to read the wallpaper style") from exc

    async def set_style(self, style: WallpaperStyle) -> bool:
        """Persist *style*; a change drops every cached wallpaper.

        Returns ``True`` when the stored style changed.
        """
        style = WallpaperStyle(style)
        if await self.get_style() == style:
            return False
        try:
            await self._settings_store.set_wallpaper_style(style)
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to save the wallpaper style") from exc
        removed = await self.invalidate_wallpapers()
        logger.info("Wallpaper style set to %s; removed %d cached images", style, removed)
        return True

    async def daily_quote(self) -> Quote | None:
        """Return today's quote, rotating when a new day has started."""
        try:
            return await self._engine.get_daily_quote()
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to resolve the daily quote") from exc

    async def rotate(self) -> Quote | None:
        """Force a new daily quote regardless of the stored date."""
        try:
            return await self._engine.rotate()
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to rotate the daily quote") from exc

    async def rotation_state(self) -> RotationState:
        try:
            return await self._engine.read_state()
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to read rotation state") from exc

    async def wallpaper_status(self) -> tuple[Quote | None, Path | None]:
        """Return today's quote and its cached wallpaper, if rendered."""
        quote = await self.daily_quote()
        if quote is None or quote.id is None:
            return quote, None
        style = await self.get_style()
        return quote, await self._coordinator.lookup(quote.id, style)

    async def generate_missing(self) -> int:
        """Render missing wallpapers for the current style.

        Only one pass runs at a time; an overlapping call returns ``0``.
        """
        if self._generating:
            logger.info("Wallpaper generation already in progress")
            return 0
        self._generating = True
        try:
            style = await self.get_style()
            try:
                return await self._coordinator.generate_missing(style)
            except RepositoryError as exc:
                raise QuoteStorageError("Unable to list quotes for generation") from exc
        finally:
            self._generating = False

    async def missing_wallpapers(self, style: WallpaperStyle | None = None) -> list[Quote]:
        """Return quotes without a cached wallpaper at *style* (current style by default)."""
        if style is None:
            style = await self.get_style()
        try:
            return await self._coordinator.find_missing(style)
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to list quotes for the wallpaper cache") from exc

    async def invalidate_wallpapers(self, quote_id: int | None = None) -> int:
        """Drop cached wallpapers for one quote or for all quotes."""
        try:
            return await self._coordinator.invalidate(quote_id)
        except OSError as exc:
            raise QuoteStorageError(f"Unable to remove cached wallpapers: {exc}") from exc
