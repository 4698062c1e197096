"""Rendered wallpaper cache keyed by quote id and background style.

Each cached wallpaper lives in the cache directory as
``quote_<id>_<style>.png``. The directory layer is synchronous and only knows
about files; the coordinator combines it with the quote store and a renderer
to keep one image per (quote, style) slot.

Updates:
  v0.2.0 - 2026-09-21 - Add ensure_cached for headless background runs.
  v0.1.1 - 2026-09-06 - Write PNGs through a temporary file and os.replace.
  v0.1.0 - 2026-08-30 - Introduce cache directory and coordinator.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from models.wallpaper import WallpaperStyle

if TYPE_CHECKING:
    from collections.abc import Iterator

    from models.quote_model import Quote

    from .stores import QuoteStore

logger = logging.getLogger("quote_wall.cache")

_CACHE_PREFIX = "quote_"
_CACHE_FILE_PATTERN = re.compile(r"^quote_(\d+)_(dark|light)\.png$")


@runtime_checkable
class WallpaperRenderer(Protocol):
    """Turn a quote into encoded image bytes; raises on failure."""

    async def render(self, quote: Quote, style: WallpaperStyle) -> bytes: ...


def cache_filename(quote_id: int, style: WallpaperStyle) -> str:
    return f"{_CACHE_PREFIX}{quote_id}_{WallpaperStyle(style).value}.png"


class WallpaperCacheDirectory:
    """Filesystem storage for cached wallpaper PNGs."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, quote_id: int, style: WallpaperStyle) -> Path:
        return self._root / cache_filename(quote_id, style)

    def lookup(self, quote_id: int, style: WallpaperStyle) -> Path | None:
        """Return the cached file path, or ``None`` when the slot is empty."""
        path = self.path_for(quote_id, style)
        return path if path.is_file() else None

    def store(self, quote_id: int, style: WallpaperStyle, data: bytes) -> Path:
        """Write *data* into the slot, replacing any previous image."""
        self._root.mkdir(parents=True, exist_ok=True)
        target = self.path_for(quote_id, style)
        temp_path = target.with_name(f".{target.name}.tmp")
        try:
            temp_path.write_bytes(data)
            os.replace(temp_path, target)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        return target

    def entries(self) -> Iterator[tuple[int, WallpaperStyle, Path]]:
        """Yield ``(quote_id, style, path)`` for every cache file present."""
        if not self._root.is_dir():
            return
        for path in sorted(self._root.iterdir()):
            match = _CACHE_FILE_PATTERN.match(path.name)
            if match is None or not path.is_file():
                continue
            yield int(match.group(1)), WallpaperStyle(match.group(2)), path

    def remove(self, quote_id: int) -> int:
        """Delete both style variants for *quote_id*; return the number removed."""
        removed = 0
        for style in WallpaperStyle:
            path = self.path_for(quote_id, style)
            if path.is_file():
                path.unlink()
                removed += 1
        return removed

    def clear(self) -> int:
        """Delete every ``quote_*`` file; other files are left alone."""
        if not self._root.is_dir():
            return 0
        removed = 0
        for path in self._root.iterdir():
            if path.name.startswith(_CACHE_PREFIX) and path.is_file():
                path.unlink()
                removed += 1
        return removed


class WallpaperCacheCoordinator:
    """Keep a rendered wallpaper available for every quote at a given style."""

    def __init__(
        self,
        directory: WallpaperCacheDirectory,
        quote_store: QuoteStore,
        renderer: WallpaperRenderer,
    ) -> None:
        self._directory = directory
        self._quotes = quote_store
        self._renderer = renderer

    @property
    def directory(self) -> WallpaperCacheDirectory:
        return self._directory

    @property
    def renderer(self) -> WallpaperRenderer:
        return self._renderer

    async def lookup(self, quote_id: int, style: WallpaperStyle) -> Path | None:
        """Return the cached image for the slot without ever generating one."""
        return await asyncio.to_thread(self._directory.lookup, quote_id, style)

    async def find_missing(self, style: WallpaperStyle) -> list[Quote]:
        quotes = await self._quotes.list_all_quotes()
        missing: list[Quote] = []
        for quote in quotes:
            if quote.id is None:
                continue
            if await self.lookup(quote.id, style) is None:
                missing.append(quote)
        return missing

    async def generate_missing(self, style: WallpaperStyle) -> int:
        """Render and store every missing wallpaper one at a time.

        A failure for one quote is logged and skipped; that slot stays empty.
        Returns the number of wallpapers written.
        """
        missing = await self.find_missing(style)
        if not missing:
            return 0
        logger.info("Generating %d missing %s wallpapers", len(missing), style)
        generated = 0
        for quote in missing:
            if await self._render_and_store(quote, style) is not None:
                generated += 1
        logger.info("Generated %d of %d %s wallpapers", generated, len(missing), style)
        return generated

    async def ensure_cached(self, quote: Quote, style: WallpaperStyle) -> Path | None:
        """Return the slot for *quote*, rendering it first when missing."""
        if quote.id is None:
            return None
        path = await self.lookup(quote.id, style)
        if path is not None:
            return path
        return await self._render_and_store(quote, style)

    async def invalidate(self, quote_id: int | None = None) -> int:
        """Drop cached wallpapers for one quote, or all of them when no id is given."""
        if quote_id is None:
            removed = await asyncio.to_thread(self._directory.clear)
            logger.info("Invalidated %d cached wallpapers", removed)
        else:
            removed = await asyncio.to_thread(self._directory.remove, quote_id)
            logger.debug("Invalidated %d cached wallpapers for quote %s", removed, quote_id)
        return removed

    async def _render_and_store(self, quote: Quote, style: WallpaperStyle) -> Path | None:
        if quote.id is None:
            return None
        try:
            data = await self._renderer.render(quote, style)
            return await asyncio.to_thread(self._directory.store, quote.id, style, data)
        except Exception:  # noqa: BLE001 - one bad quote must not stop the batch
            logger.exception("Failed to generate %s wallpaper for quote %s", style, quote.id)
            return None


__all__ = [
    "WallpaperCacheCoordinator",
    "WallpaperCacheDirectory",
    "WallpaperRenderer",
    "cache_filename",
]
