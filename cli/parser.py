"""Argument parser for the Quote Wall CLI.

Updates:
  v0.2.0 - 2026-09-28 - Add apply and daemon commands for unattended refreshes.
  v0.1.1 - 2026-09-20 - Add bulk import command with dry-run preview.
  v0.1.0 - 2026-08-30 - Introduce quote, category and wallpaper subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from models.wallpaper import WallpaperStyle

if TYPE_CHECKING:
    from collections.abc import Sequence


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def _add_category_option(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=None,
        metavar="NAME_OR_ID",
        help=help_text,
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the Quote Wall launcher."""
    parser = argparse.ArgumentParser(
        prog="quote-wall",
        description="Daily quote wallpapers from a local quote library",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("today", help="Show today's quote, rotating on a new day (default).")
    subparsers.add_parser("rotate", help="Pick a new daily quote immediately.")
    subparsers.add_parser(
        "status",
        help="Show rotation state, wallpaper style and cache readiness.",
    )

    add_parser = subparsers.add_parser("quote-add", help="Add a quote to the library.")
    add_parser.add_argument("text", type=str, help="Quote text.")
    add_parser.add_argument("--author", type=str, default=None, help="Quote author.")
    _add_category_option(add_parser, "Category name or id (repeatable).")

    list_parser = subparsers.add_parser("quote-list", help="List quotes, newest first.")
    list_parser.add_argument(
        "--category",
        type=str,
        default=None,
        metavar="NAME_OR_ID",
        help="Only list quotes in this category.",
    )

    edit_parser = subparsers.add_parser("quote-edit", help="Edit an existing quote.")
    edit_parser.add_argument("quote_id", type=int, help="Quote id.")
    edit_parser.add_argument("--text", type=str, default=None, help="Replacement text.")
    edit_parser.add_argument(
        "--author",
        type=str,
        default=None,
        help="Replacement author (pass an empty string to clear).",
    )
    _add_category_option(edit_parser, "Replace categories with these (repeatable).")
    edit_parser.add_argument(
        "--clear-categories",
        action="store_true",
        help="Remove every category from the quote.",
    )

    delete_parser = subparsers.add_parser("quote-delete", help="Delete a quote.")
    delete_parser.add_argument("quote_id", type=int, help="Quote id.")

    category_add = subparsers.add_parser("category-add", help="Create a category.")
    category_add.add_argument("name", type=str, help="Category name.")
    subparsers.add_parser("category-list", help="List categories.")
    category_rename = subparsers.add_parser("category-rename", help="Rename a category.")
    category_rename.add_argument("category_id", type=int, help="Category id.")
    category_rename.add_argument("name", type=str, help="New category name.")
    category_delete = subparsers.add_parser(
        "category-delete",
        help="Delete a category; its quotes are kept.",
    )
    category_delete.add_argument("category_id", type=int, help="Category id.")

    style_parser = subparsers.add_parser(
        "style",
        help="Show or change the wallpaper background style.",
    )
    style_parser.add_argument(
        "style",
        nargs="?",
        choices=[style.value for style in WallpaperStyle],
        default=None,
        help="New style; changing it clears the wallpaper cache.",
    )

    subparsers.add_parser("generate", help="Render every missing wallpaper for the current style.")

    invalidate_parser = subparsers.add_parser("invalidate", help="Delete cached wallpapers.")
    invalidate_parser.add_argument(
        "--quote-id",
        type=int,
        default=None,
        help="Only delete wallpapers for this quote.",
    )

    import_parser = subparsers.add_parser(
        "import",
        help="Extract quotes from a text file with LiteLLM and add them to the library.",
    )
    import_parser.add_argument("path", type=str, help="UTF-8 text file, or '-' for stdin.")
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the parsed quotes without saving them.",
    )

    subparsers.add_parser("apply", help="Apply today's wallpaper to the desktop once.")

    daemon_parser = subparsers.add_parser(
        "daemon",
        help="Refresh the desktop wallpaper periodically.",
    )
    daemon_parser.add_argument(
        "--interval-hours",
        type=_positive_float,
        default=None,
        help="Hours between refreshes (defaults to the configured interval).",
    )
    daemon_parser.add_argument(
        "--iterations",
        type=_positive_int,
        default=None,
        help="Stop after this many runs (default: run until interrupted).",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Quote Wall launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
