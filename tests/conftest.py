"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-09-14 - Provide repository, store and renderer fixtures.
  v0.1.0 - 2026-08-30 - Isolate settings loading from developer config files.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from core.repository import QuoteRepository
from core.rotation import RotationEngine
from core.stores import SQLiteQuoteStore, SQLiteSettingsStore
from core.wallpaper_cache import WallpaperCacheCoordinator, WallpaperCacheDirectory

if TYPE_CHECKING:
    from pathlib import Path

    from models.quote_model import Quote
    from models.wallpaper import WallpaperStyle

_SETTINGS_ENV = (
    "QUOTE_WALL_CONFIG_JSON",
    "QUOTE_WALL_DB_PATH",
    "QUOTE_WALL_DATABASE_PATH",
    "QUOTE_WALL_WALLPAPER_DIR",
    "QUOTE_WALL_WALLPAPER_WIDTH",
    "QUOTE_WALL_WALLPAPER_HEIGHT",
    "QUOTE_WALL_FONT_PATH",
    "QUOTE_WALL_WALLPAPER_COMMAND",
    "QUOTE_WALL_BACKGROUND_INTERVAL_HOURS",
    "QUOTE_WALL_IMPORT_PROMPT",
    "QUOTE_WALL_LITELLM_MODEL",
    "QUOTE_WALL_LITELLM_API_KEY",
    "QUOTE_WALL_LITELLM_API_BASE",
    "QUOTE_WALL_LITELLM_API_VERSION",
    "QUOTE_WALL_LITELLM_DROP_PARAMS",
    "QUOTE_WALL_LITELLM_TIMEOUT_SECONDS",
    "QUOTE_WALL_LITELLM_MAX_ATTEMPTS",
    "QUOTE_WALL_LITELLM_LOGGING_ENABLED",
    "DB_PATH",
    "DATABASE_PATH",
    "WALLPAPER_DIR",
    "LITELLM_MODEL",
    "LITELLM_API_KEY",
    "LITELLM_API_BASE",
    "LITELLM_API_VERSION",
)


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer .env and config.json files out of the test run."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("QUOTE_WALL_ENV_FILE", "")
    monkeypatch.chdir(tmp_path)


class RecordingRenderer:
    """Renderer double that records calls and can fail for chosen quote ids."""

    def __init__(self, fail_ids: set[int] | None = None) -> None:
        self.calls: list[tuple[int | None, WallpaperStyle]] = []
        self.fail_ids = fail_ids or set()

    async def render(self, quote: Quote, style: WallpaperStyle) -> bytes:
        self.calls.append((quote.id, style))
        if quote.id in self.fail_ids:
            raise RuntimeError(f"render failed for {quote.id}")
        return f"png:{quote.id}:{style}".encode()


@pytest.fixture()
def repository(tmp_path: Path) -> QuoteRepository:
    return QuoteRepository(tmp_path / "data" / "quotes.db")


@pytest.fixture()
def quote_store(repository: QuoteRepository) -> SQLiteQuoteStore:
    return SQLiteQuoteStore(repository)


@pytest.fixture()
def settings_store(repository: QuoteRepository) -> SQLiteSettingsStore:
    return SQLiteSettingsStore(repository)


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def cache_directory(tmp_path: Path) -> WallpaperCacheDirectory:
    return WallpaperCacheDirectory(tmp_path / "wallpapers")


@pytest.fixture()
def coordinator(
    cache_directory: WallpaperCacheDirectory,
    quote_store: SQLiteQuoteStore,
    renderer: RecordingRenderer,
) -> WallpaperCacheCoordinator:
    return WallpaperCacheCoordinator(cache_directory, quote_store, renderer)


@pytest.fixture()
def fixed_today() -> list[date]:
    """Mutable clock: tests append or replace the single date it holds."""
    return [date(2025, 1, 15)]


@pytest.fixture()
def engine(
    quote_store: SQLiteQuoteStore,
    settings_store: SQLiteSettingsStore,
    fixed_today: list[date],
) -> RotationEngine:
    return RotationEngine(quote_store, settings_store, today=lambda: fixed_today[0])
