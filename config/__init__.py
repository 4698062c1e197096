"""Configuration helpers for Quote Wall.

Updates: v0.1.1 - 2026-09-21 - Export rendering and scheduling defaults.
Updates: v0.1.0 - 2026-08-30 - Expose settings loader and configuration error type.
"""

from .settings import (
    DEFAULT_BACKGROUND_INTERVAL_HOURS,
    DEFAULT_DB_PATH,
    DEFAULT_WALLPAPER_DIR,
    DEFAULT_WALLPAPER_HEIGHT,
    DEFAULT_WALLPAPER_WIDTH,
    QuoteWallSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_BACKGROUND_INTERVAL_HOURS",
    "DEFAULT_DB_PATH",
    "DEFAULT_WALLPAPER_DIR",
    "DEFAULT_WALLPAPER_HEIGHT",
    "DEFAULT_WALLPAPER_WIDTH",
    "QuoteWallSettings",
    "SettingsError",
    "load_settings",
]
