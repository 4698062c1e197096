"""Unattended daily wallpaper refresh.

The job runs without any UI: it resolves today's quote, makes sure a rendered
wallpaper exists for the current style and applies it.

Updates:
  v0.1.1 - 2026-09-28 - Render on cache miss so headless runs can still apply.
  v0.1.0 - 2026-09-21 - Introduce DailyWallpaperJob and periodic runner.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .rotation import RotationEngine
    from .stores import SettingsStore
    from .wallpaper_cache import WallpaperCacheCoordinator
    from .wallpaper_setter import WallpaperSetter

logger = logging.getLogger("quote_wall.background")

DEFAULT_INTERVAL_SECONDS = 12 * 60 * 60


class BackgroundFetchResult(StrEnum):
    NEW_DATA = "new_data"
    NO_DATA = "no_data"
    FAILED = "failed"


class DailyWallpaperJob:
    """Rotate the daily quote and apply its cached wallpaper."""

    def __init__(
        self,
        engine: RotationEngine,
        coordinator: WallpaperCacheCoordinator,
        settings_store: SettingsStore,
        setter: WallpaperSetter,
        *,
        generate_on_miss: bool = True,
    ) -> None:
        self._engine = engine
        self._coordinator = coordinator
        self._settings = settings_store
        self._setter = setter
        self._generate_on_miss = generate_on_miss

    async def run_once(self) -> BackgroundFetchResult:
        try:
            quote = await self._engine.get_daily_quote()
            if quote is None or quote.id is None:
                logger.info("No quotes available for the daily wallpaper")
                return BackgroundFetchResult.NO_DATA

            style = await self._settings.get_wallpaper_style()
            path = await self._coordinator.lookup(quote.id, style)
            if path is None and self._generate_on_miss:
                path = await self._coordinator.ensure_cached(quote, style)
            if path is None:
                logger.info("Wallpaper for quote %s is still generating", quote.id)
                return BackgroundFetchResult.NO_DATA

            if await self._setter.apply(path):
                logger.info("Applied daily wallpaper for quote %s (%s)", quote.id, style)
                return BackgroundFetchResult.NEW_DATA
            return BackgroundFetchResult.NO_DATA
        except Exception:  # noqa: BLE001 - unattended boundary
            logger.exception("Daily wallpaper job failed")
            return BackgroundFetchResult.FAILED


T = TypeVar("T")


async def run_periodically(
    callback: Callable[[], Awaitable[T]],
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    *,
    iterations: int | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> list[T]:
    """Await *callback* now and then roughly every *interval_seconds*.

    Args:
      callback: Zero-argument coroutine factory.
      interval_seconds: Pause between runs; must be positive.
      iterations: Stop after this many runs; ``None`` runs until cancelled.
      sleep: Awaitable used to pause between runs.

    Returns:
      Results of the runs that completed without raising.
    """
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be greater than zero")
    results: list[T] = []
    run = 0
    while iterations is None or run < iterations:
        run += 1
        try:
            results.append(await callback())
        except Exception:  # noqa: BLE001 - keep the schedule alive
            logger.exception("Periodic run %d failed", run)
        if iterations is not None and run >= iterations:
            break
        await sleep(interval_seconds)
    return results


__all__ = [
    "BackgroundFetchResult",
    "DEFAULT_INTERVAL_SECONDS",
    "DailyWallpaperJob",
    "run_periodically",
]
