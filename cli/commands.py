"""CLI command handlers for Quote Wall.

Handlers are coroutines dispatched through :data:`COMMAND_SPECS`; ``main``
runs the selected one with :func:`asyncio.run`.

Exit codes: ``0`` success, ``4`` not found or nothing to do, ``5`` import
failure, ``6`` wallpaper apply failure. Settings (``2``) and service
initialisation (``3``) failures are reported by ``main``.

Updates:
  v0.3.1 - 2026-10-17 - Report undecodable import files as import failures.
  v0.3.0 - 2026-09-28 - Add apply and daemon commands.
  v0.2.0 - 2026-09-20 - Add bulk import command.
  v0.1.0 - 2026-08-30 - Introduce quote, category and wallpaper commands.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from core import (
    BackgroundFetchResult,
    CategoryExistsError,
    CategoryNotFoundError,
    QuoteImportError,
    QuoteNotFoundError,
    WallpaperStyle,
    build_daily_job,
    run_periodically,
)

from .utils import format_quote, print_and_log, resolve_category_refs

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import QuoteWallSettings
    from core.quote_wall import QuoteWall
else:  # pragma: no cover - runtime placeholders for type-only imports
    QuoteWall = QuoteWallSettings = Any

EXIT_OK = 0
EXIT_NOT_FOUND = 4
EXIT_IMPORT_FAILED = 5
EXIT_APPLY_FAILED = 6

CommandHandler = Callable[
    [QuoteWall, QuoteWallSettings, argparse.Namespace, logging.Logger],
    Awaitable[int],
]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


async def _category_names(quote_wall: QuoteWall) -> dict[int, str]:
    return {
        category.id: category.name
        for category in await quote_wall.list_categories()
        if category.id is not None
    }


async def _resolve_categories(quote_wall: QuoteWall, refs: list[str]) -> list[int]:
    return resolve_category_refs(refs, await quote_wall.list_categories())


async def run_today(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    quote = await quote_wall.daily_quote()
    if quote is None:
        print_and_log(logger, logging.INFO, "No quotes yet. Add one with `quote-add`.")
        return EXIT_NOT_FOUND
    print(format_quote(quote, await _category_names(quote_wall)))
    return EXIT_OK


async def run_rotate(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    quote = await quote_wall.rotate()
    if quote is None:
        print_and_log(logger, logging.INFO, "No quotes to rotate.")
        return EXIT_NOT_FOUND
    print(format_quote(quote, await _category_names(quote_wall)))
    return EXIT_OK


async def run_status(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    quote, path = await quote_wall.wallpaper_status()
    state = await quote_wall.rotation_state()
    style = await quote_wall.get_style()
    quotes = await quote_wall.list_quotes()
    missing = await quote_wall.missing_wallpapers(style)
    lines = [
        f"Quotes: {len(quotes)}",
        f"Style: {style}",
        f"Active quote: {state.current_quote_id if state.current_quote_id is not None else 'none'}",
        f"Selected on: {state.last_quote_date or 'never'}",
        f"Cached wallpapers: {len(quotes) - len(missing)}/{len(quotes)}",
    ]
    if quote is not None:
        lines.append(f"Today's wallpaper: {path if path is not None else 'not generated yet'}")
    print("\n".join(lines))
    return EXIT_OK


async def run_quote_add(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        category_ids = await _resolve_categories(quote_wall, args.categories or [])
        quote = await quote_wall.add_quote(args.text, args.author, category_ids)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to add quote: {exc}")
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Added quote #{quote.id}")
    return EXIT_OK


async def run_quote_list(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    category_id = None
    if args.category:
        try:
            category_id = (await _resolve_categories(quote_wall, [args.category]))[0]
        except ValueError as exc:
            print_and_log(logger, logging.ERROR, str(exc))
            return EXIT_NOT_FOUND
    quotes = await quote_wall.list_quotes(category_id)
    if not quotes:
        print("No quotes found.")
        return EXIT_OK
    names = await _category_names(quote_wall)
    print("\n\n".join(format_quote(quote, names) for quote in quotes))
    return EXIT_OK


async def run_quote_edit(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        quote = await quote_wall.get_quote(args.quote_id)
        changes: dict[str, Any] = {}
        if args.text is not None:
            changes["text"] = args.text
        if args.author is not None:
            changes["author"] = args.author
        if args.clear_categories:
            changes["category_ids"] = []
        elif args.categories:
            changes["category_ids"] = await _resolve_categories(quote_wall, args.categories)
        if not changes:
            print_and_log(logger, logging.INFO, "Nothing to change.")
            return EXIT_NOT_FOUND
        updated = await quote_wall.update_quote(dataclasses.replace(quote, **changes))
    except QuoteNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, f"Unable to update quote: {exc}")
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Updated quote #{updated.id}")
    return EXIT_OK


async def run_quote_delete(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        await quote_wall.delete_quote(args.quote_id)
    except QuoteNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Deleted quote #{args.quote_id}")
    return EXIT_OK


async def run_category_add(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        category = await quote_wall.create_category(args.name)
    except (CategoryExistsError, ValueError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Created category #{category.id} {category.name}")
    return EXIT_OK


async def run_category_list(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    categories = await quote_wall.list_categories()
    if not categories:
        print("No categories defined.")
        return EXIT_OK
    for category in categories:
        print(f"{category.id:>4}  {category.name}")
    return EXIT_OK


async def run_category_rename(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        category = await quote_wall.rename_category(args.category_id, args.name)
    except (CategoryNotFoundError, CategoryExistsError, ValueError) as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Renamed category #{category.id} to {category.name}")
    return EXIT_OK


async def run_category_delete(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        await quote_wall.delete_category(args.category_id)
    except CategoryNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    print_and_log(logger, logging.INFO, f"Deleted category #{args.category_id}")
    return EXIT_OK


async def run_style(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    if args.style is None:
        print(await quote_wall.get_style())
        return EXIT_OK
    style = WallpaperStyle(args.style)
    if await quote_wall.set_style(style):
        print_and_log(logger, logging.INFO, f"Wallpaper style set to {style}; cache cleared.")
    else:
        print_and_log(logger, logging.INFO, f"Wallpaper style is already {style}.")
    return EXIT_OK


async def run_generate(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    style = await quote_wall.get_style()
    missing = await quote_wall.missing_wallpapers(style)
    generated = await quote_wall.generate_missing()
    print_and_log(
        logger,
        logging.INFO,
        f"Generated {generated} of {len(missing)} missing {style} wallpapers.",
    )
    return EXIT_OK if generated == len(missing) else EXIT_NOT_FOUND


async def run_invalidate(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    removed = await quote_wall.invalidate_wallpapers(args.quote_id)
    scope = f"quote #{args.quote_id}" if args.quote_id is not None else "all quotes"
    print_and_log(logger, logging.INFO, f"Removed {removed} cached wallpapers for {scope}.")
    return EXIT_OK


def _read_import_text(path_arg: str) -> str:
    if path_arg == "-":
        return sys.stdin.read()
    path = Path(path_arg).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QuoteImportError(f"Unable to read {path}: {exc}") from exc


async def run_import(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    try:
        text = _read_import_text(args.path)
        if args.dry_run:
            parsed = await quote_wall.preview_import(text)
            for item in parsed:
                suffix = f" - {item.author}" if item.author else ""
                tags = f" [{', '.join(item.categories)}]" if item.categories else ""
                print(f"“{item.text}”{suffix}{tags}")
            print_and_log(logger, logging.INFO, f"Parsed {len(parsed)} quotes (dry run).")
            return EXIT_OK
        result = await quote_wall.import_quotes(text)
    except QuoteImportError as exc:
        print_and_log(logger, logging.ERROR, f"Import failed: {exc}")
        return EXIT_IMPORT_FAILED
    print_and_log(
        logger,
        logging.INFO,
        f"Imported {len(result.created)} of {len(result.parsed)} quotes "
        f"({len(result.skipped)} duplicates skipped).",
    )
    return EXIT_OK


_APPLY_EXIT_CODES = {
    BackgroundFetchResult.NEW_DATA: EXIT_OK,
    BackgroundFetchResult.NO_DATA: EXIT_NOT_FOUND,
    BackgroundFetchResult.FAILED: EXIT_APPLY_FAILED,
}


async def run_apply(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    job = build_daily_job(quote_wall, settings)
    result = await job.run_once()
    print_and_log(logger, logging.INFO, f"Wallpaper refresh result: {result}")
    return _APPLY_EXIT_CODES[result]


async def run_daemon(
    quote_wall: QuoteWall,
    settings: QuoteWallSettings,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    hours = args.interval_hours or settings.background_interval_hours
    job = build_daily_job(quote_wall, settings)
    logger.info("Refreshing the wallpaper every %g hours", hours)
    results = await run_periodically(job.run_once, hours * 3600, iterations=args.iterations)
    if results and results[-1] is BackgroundFetchResult.FAILED:
        return EXIT_APPLY_FAILED
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    None: CommandSpec(run_today),
    "today": CommandSpec(run_today),
    "rotate": CommandSpec(run_rotate),
    "status": CommandSpec(run_status),
    "quote-add": CommandSpec(run_quote_add),
    "quote-list": CommandSpec(run_quote_list),
    "quote-edit": CommandSpec(run_quote_edit),
    "quote-delete": CommandSpec(run_quote_delete),
    "category-add": CommandSpec(run_category_add),
    "category-list": CommandSpec(run_category_list),
    "category-rename": CommandSpec(run_category_rename),
    "category-delete": CommandSpec(run_category_delete),
    "style": CommandSpec(run_style),
    "generate": CommandSpec(run_generate),
    "invalidate": CommandSpec(run_invalidate),
    "import": CommandSpec(run_import),
    "apply": CommandSpec(run_apply),
    "daemon": CommandSpec(run_daemon),
}

__all__ = [
    "COMMAND_SPECS",
    "CommandSpec",
    "EXIT_APPLY_FAILED",
    "EXIT_IMPORT_FAILED",
    "EXIT_NOT_FOUND",
    "EXIT_OK",
]
