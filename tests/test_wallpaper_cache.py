"""Tests for the rendered wallpaper cache.

Updates:
  v0.1.1 - 2026-09-21 - Cover ensure_cached for background runs.
  v0.1.0 - 2026-08-30 - Cover idempotence, invalidation scope and partial failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.wallpaper_cache import (
    WallpaperCacheCoordinator,
    WallpaperCacheDirectory,
    WallpaperRenderer,
    cache_filename,
)
from models.quote_model import Quote
from models.wallpaper import WallpaperStyle

if TYPE_CHECKING:
    from core.stores import SQLiteQuoteStore
    from tests.conftest import RecordingRenderer

DARK = WallpaperStyle.DARK
LIGHT = WallpaperStyle.LIGHT


async def _add(quote_store: SQLiteQuoteStore, *texts: str) -> list[Quote]:
    return [await quote_store.add_quote(Quote(id=None, text=text)) for text in texts]


def test_cache_filename_layout() -> None:
    assert cache_filename(12, DARK) == "quote_12_dark.png"
    assert cache_filename(3, LIGHT) == "quote_3_light.png"


def test_recording_renderer_matches_protocol(renderer: RecordingRenderer) -> None:
    assert isinstance(renderer, WallpaperRenderer)


def test_directory_store_lookup_and_entries(cache_directory: WallpaperCacheDirectory) -> None:
    assert cache_directory.lookup(1, DARK) is None
    assert list(cache_directory.entries()) == []

    path = cache_directory.store(1, DARK, b"image")

    assert path.read_bytes() == b"image"
    assert cache_directory.lookup(1, DARK) == path
    assert cache_directory.lookup(1, LIGHT) is None
    assert [(quote_id, style) for quote_id, style, _ in cache_directory.entries()] == [(1, DARK)]
    assert not any(p.name.endswith(".tmp") for p in cache_directory.root.iterdir())


def test_directory_clear_leaves_foreign_files(cache_directory: WallpaperCacheDirectory) -> None:
    cache_directory.store(1, DARK, b"a")
    cache_directory.store(2, LIGHT, b"b")
    keep = cache_directory.root / "notes.txt"
    keep.write_text("keep me", encoding="utf-8")

    assert cache_directory.clear() == 2
    assert keep.exists()


@pytest.mark.asyncio()
async def test_generate_missing_is_idempotent(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
    renderer: RecordingRenderer,
) -> None:
    await _add(quote_store, "One", "Two", "Three")

    assert len(await coordinator.find_missing(DARK)) == 3
    assert await coordinator.generate_missing(DARK) == 3
    assert await coordinator.find_missing(DARK) == []
    assert await coordinator.generate_missing(DARK) == 0
    assert len(renderer.calls) == 3
    assert len(await coordinator.find_missing(LIGHT)) == 3


@pytest.mark.asyncio()
async def test_partial_render_failure_is_isolated(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
    renderer: RecordingRenderer,
) -> None:
    first, second, third = await _add(quote_store, "One", "Two", "Three")
    renderer.fail_ids.add(second.id or 0)

    assert await coordinator.generate_missing(DARK) == 2

    missing = await coordinator.find_missing(DARK)
    assert [quote.id for quote in missing] == [second.id]
    assert await coordinator.lookup(first.id or 0, DARK) is not None
    assert await coordinator.lookup(third.id or 0, DARK) is not None
    assert len(renderer.calls) == 3

    renderer.fail_ids.clear()
    assert await coordinator.generate_missing(DARK) == 1
    assert await coordinator.find_missing(DARK) == []


@pytest.mark.asyncio()
async def test_invalidate_single_quote_removes_both_styles_only(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
) -> None:
    first, second = await _add(quote_store, "One", "Two")
    await coordinator.generate_missing(DARK)
    await coordinator.generate_missing(LIGHT)

    assert await coordinator.invalidate(first.id) == 2

    assert await coordinator.lookup(first.id or 0, DARK) is None
    assert await coordinator.lookup(first.id or 0, LIGHT) is None
    assert await coordinator.lookup(second.id or 0, DARK) is not None
    assert await coordinator.lookup(second.id or 0, LIGHT) is not None


@pytest.mark.asyncio()
async def test_invalidate_all_removes_every_entry(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
) -> None:
    await _add(quote_store, "One", "Two")
    await coordinator.generate_missing(DARK)
    await coordinator.generate_missing(LIGHT)

    assert await coordinator.invalidate() == 4
    assert list(coordinator.directory.entries()) == []


@pytest.mark.asyncio()
async def test_lookup_never_generates(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
    renderer: RecordingRenderer,
) -> None:
    (quote,) = await _add(quote_store, "Only")
    assert await coordinator.lookup(quote.id or 0, DARK) is None
    assert renderer.calls == []


@pytest.mark.asyncio()
async def test_ensure_cached_renders_once(
    coordinator: WallpaperCacheCoordinator,
    quote_store: SQLiteQuoteStore,
    renderer: RecordingRenderer,
) -> None:
    (quote,) = await _add(quote_store, "Only")

    path = await coordinator.ensure_cached(quote, LIGHT)
    again = await coordinator.ensure_cached(quote, LIGHT)

    assert path is not None
    assert again == path
    assert renderer.calls == [(quote.id, LIGHT)]


@pytest.mark.asyncio()
async def test_ensure_cached_skips_unsaved_quotes(
    coordinator: WallpaperCacheCoordinator,
    renderer: RecordingRenderer,
) -> None:
    assert await coordinator.ensure_cached(Quote(id=None, text="Draft"), DARK) is None
    assert renderer.calls == []
