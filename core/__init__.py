"""Core service layer for Quote Wall.

Updates:
  v0.3.0 - 2026-09-28 - Export background job and wallpaper setters.
  v0.2.0 - 2026-09-20 - Export bulk import helpers.
  v0.1.0 - 2026-08-30 - Surface QuoteRepository, RotationEngine and cache coordinator.
"""

from models.quote_model import Quote
from models.wallpaper import WallpaperStyle

from .background import BackgroundFetchResult, DailyWallpaperJob, run_periodically
from .exceptions import (
    CategoryError,
    CategoryExistsError,
    CategoryNotFoundError,
    CategoryStorageError,
    QuoteImportError,
    QuoteImportUnavailable,
    QuoteNotFoundError,
    QuoteStorageError,
    QuoteWallError,
    RenderError,
    WallpaperApplyError,
)
from .factory import build_daily_job, build_quote_wall, build_wallpaper_setter
from .quote_import import ImportResult, LiteLLMQuoteParser, ParsedQuote, QuoteImporter
from .quote_wall import QuoteWall
from .rendering import PillowWallpaperRenderer
from .repository import QuoteRepository, RepositoryError, RepositoryNotFoundError
from .rotation import RotationEngine
from .stores import QuoteStore, SettingsStore, SQLiteQuoteStore, SQLiteSettingsStore
from .wallpaper_cache import WallpaperCacheCoordinator, WallpaperCacheDirectory
from .wallpaper_setter import CommandWallpaperSetter, GnomeWallpaperSetter, WallpaperSetter

__all__ = [
    "BackgroundFetchResult",
    "CategoryError",
    "CategoryExistsError",
    "CategoryNotFoundError",
    "CategoryStorageError",
    "CommandWallpaperSetter",
    "DailyWallpaperJob",
    "GnomeWallpaperSetter",
    "ImportResult",
    "LiteLLMQuoteParser",
    "ParsedQuote",
    "PillowWallpaperRenderer",
    "Quote",
    "QuoteImportError",
    "QuoteImportUnavailable",
    "QuoteImporter",
    "QuoteNotFoundError",
    "QuoteRepository",
    "QuoteStorageError",
    "QuoteStore",
    "QuoteWall",
    "QuoteWallError",
    "RenderError",
    "RepositoryError",
    "RepositoryNotFoundError",
    "RotationEngine",
    "SQLiteQuoteStore",
    "SQLiteSettingsStore",
    "SettingsStore",
    "WallpaperApplyError",
    "WallpaperCacheCoordinator",
    "WallpaperCacheDirectory",
    "WallpaperSetter",
    "WallpaperStyle",
    "build_daily_job",
    "build_quote_wall",
    "build_wallpaper_setter",
    "run_periodically",
]
