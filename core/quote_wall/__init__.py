"""Quote Wall service façade.

``QuoteWall`` composes the quote, category, wallpaper and import mixins on top
of the injected stores, rotation engine and cache coordinator. The CLI and the
background job only talk to this class.

Updates:
  v0.3.0 - 2026-09-28 - Expose collaborators for the daily wallpaper job.
  v0.2.0 - 2026-09-21 - Split service APIs into mixin modules.
  v0.1.0 - 2026-09-14 - Introduce QuoteWall service.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .categories import CategorySupport
from .importing import ImportSupport
from .quotes import QuoteSupport
from .wallpapers import WallpaperSupport

if TYPE_CHECKING:
    from ..quote_import import QuoteImporter
    from ..rotation import RotationEngine
    from ..stores import SQLiteQuoteStore, SQLiteSettingsStore
    from ..wallpaper_cache import WallpaperCacheCoordinator

logger = logging.getLogger("quote_wall.service")


class QuoteWall(
    QuoteSupport,
    CategorySupport,
    WallpaperSupport,
    ImportSupport,
):
    """Manage the quote library, daily rotation and wallpaper cache."""

    def __init__(
        self,
        quote_store: SQLiteQuoteStore,
        settings_store: SQLiteSettingsStore,
        engine: RotationEngine,
        coordinator: WallpaperCacheCoordinator,
        importer: QuoteImporter | None = None,
    ) -> None:
        self._quote_store = quote_store
        self._settings_store = settings_store
        self._engine = engine
        self._coordinator = coordinator
        self._importer = importer
        self._generating = False
        self._closed = False

    @property
    def quote_store(self) -> SQLiteQuoteStore:
        return self._quote_store

    @property
    def settings_store(self) -> SQLiteSettingsStore:
        return self._settings_store

    @property
    def engine(self) -> RotationEngine:
        return self._engine

    @property
    def coordinator(self) -> WallpaperCacheCoordinator:
        return self._coordinator

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release service resources; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._importer = None
        logger.debug("Quote Wall service closed")


__all__ = ["QuoteWall"]
