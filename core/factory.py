"""Factories for constructing the Quote Wall service graph from validated settings.

Updates:
  v0.2.0 - 2026-09-28 - Build the daily wallpaper job and platform setter.
  v0.1.1 - 2026-09-20 - Skip the LiteLLM importer when no model is configured.
  v0.1.0 - 2026-08-30 - Wire repository, stores, rotation engine and cache coordinator.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from .background import DailyWallpaperJob
from .exceptions import QuoteStorageError
from .quote_import import LiteLLMQuoteParser, QuoteImporter, QuoteParser
from .quote_wall import QuoteWall
from .rendering import PillowWallpaperRenderer
from .repository import QuoteRepository, RepositoryError
from .rotation import RotationEngine
from .stores import SQLiteQuoteStore, SQLiteSettingsStore
from .wallpaper_cache import WallpaperCacheCoordinator, WallpaperCacheDirectory, WallpaperRenderer
from .wallpaper_setter import CommandWallpaperSetter, GnomeWallpaperSetter, WallpaperSetter

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable

    from config import QuoteWallSettings
else:  # pragma: no cover - typing only
    QuoteWallSettings = Any

factory_logger = logging.getLogger("quote_wall.factory")


def determine_import_status(settings: QuoteWallSettings) -> tuple[bool, str | None]:
    """Return whether bulk import can run and, if not, why."""
    model = settings.litellm_model
    if not model:
        return False, "QUOTE_WALL_LITELLM_MODEL is not set"
    if model.lower().startswith("azure/"):
        missing = [
            name
            for name, value in (
                ("QUOTE_WALL_LITELLM_API_BASE", settings.litellm_api_base),
                ("QUOTE_WALL_LITELLM_API_VERSION", settings.litellm_api_version),
            )
            if not value
        ]
        if missing:
            return False, f"Azure models also require {' and '.join(missing)}"
    return True, None


def build_quote_parser(settings: QuoteWallSettings) -> LiteLLMQuoteParser | None:
    """Return a LiteLLM parser when import is configured, otherwise ``None``."""
    enabled, reason = determine_import_status(settings)
    if not enabled:
        factory_logger.info("Bulk import disabled: %s", reason)
        return None
    assert settings.litellm_model is not None
    return LiteLLMQuoteParser(
        model=settings.litellm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        api_version=settings.litellm_api_version,
        drop_params=settings.litellm_drop_params,
        timeout_seconds=settings.litellm_timeout_seconds,
        max_attempts=settings.litellm_max_attempts,
        system_prompt=settings.import_prompt,
    )


def build_quote_wall(
    settings: QuoteWallSettings,
    *,
    repository: QuoteRepository | None = None,
    renderer: WallpaperRenderer | None = None,
    parser: QuoteParser | None = None,
    today: Callable[[], date] | None = None,
) -> QuoteWall:
    """Return a QuoteWall service configured from validated settings."""
    try:
        repository_instance = repository or QuoteRepository(settings.db_path)
    except RepositoryError as exc:
        raise QuoteStorageError(f"Unable to open quote database at {settings.db_path}") from exc

    quote_store = SQLiteQuoteStore(repository_instance)
    settings_store = SQLiteSettingsStore(repository_instance)
    engine = RotationEngine(quote_store, settings_store, today=today or date.today)
    coordinator = WallpaperCacheCoordinator(
        WallpaperCacheDirectory(settings.wallpaper_dir),
        quote_store,
        renderer
        or PillowWallpaperRenderer(
            settings.wallpaper_width,
            settings.wallpaper_height,
            settings.font_path,
        ),
    )
    resolved_parser = parser if parser is not None else build_quote_parser(settings)
    importer = QuoteImporter(resolved_parser, quote_store) if resolved_parser else None
    factory_logger.debug(
        "Built Quote Wall service (db=%s, wallpapers=%s, import=%s)",
        repository_instance.db_path,
        settings.wallpaper_dir,
        importer is not None,
    )
    return QuoteWall(quote_store, settings_store, engine, coordinator, importer)


def build_wallpaper_setter(settings: QuoteWallSettings) -> WallpaperSetter:
    """Return the configured command setter, or gsettings when none is set."""
    if settings.wallpaper_command:
        return CommandWallpaperSetter(settings.wallpaper_command)
    return GnomeWallpaperSetter()


def build_daily_job(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    *,
    setter: WallpaperSetter | None = None,
) -> DailyWallpaperJob:
    """Return the unattended job that rotates and applies today's wallpaper."""
    return DailyWallpaperJob(
        quote_wall.engine,
        quote_wall.coordinator,
        quote_wall.settings_store,
        setter or build_wallpaper_setter(settings),
    )


__all__ = [
    "build_daily_job",
    "build_quote_parser",
    "build_quote_wall",
    "build_wallpaper_setter",
    "determine_import_status",
]
