"""Shared CLI utility functions for Quote Wall commands.

Updates:
  v0.1.1 - 2026-09-14 - Add quote formatting and category reference helpers.
  v0.1.0 - 2026-08-30 - Add stdout logging, masking and path helpers.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import TYPE_CHECKING, Any

from models.category_model import category_key

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Mapping, Sequence
    from logging import Logger

    from models.category_model import Category
    from models.quote_model import Quote
else:  # pragma: no cover - runtime placeholders for type-only imports
    Mapping = Sequence = Logger = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def mask_secret(value: str | None) -> str:
    """Return an obfuscated representation of secret configuration values."""
    if not value:
        return "not set"
    secret = value.strip()
    if len(secret) <= 6:
        return "set (****)"
    return f"set ({secret[:4]}...{secret[-4:]})"


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    if path_value is None:
        return "not set"
    try:
        path = Path(str(path_value))
    except TypeError:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if allow_missing:
        message = f"{resolved} (missing - created on demand)"
    if not resolved.parent.exists():
        message += f", parent missing: {resolved.parent}"
    return message


def format_quote(
    quote: Quote,
    category_names: Mapping[int, str] | None = None,
    *,
    width: int = 78,
) -> str:
    """Return a multi-line, wrapped rendering of *quote* for terminal output."""
    header = f"#{quote.id}" if quote.id is not None else "#new"
    body = textwrap.fill(
        f"“{quote.text}”",
        width=width,
        initial_indent="  ",
        subsequent_indent="  ",
    )
    lines = [header, body]
    if quote.author:
        lines.append(f"    - {quote.author}")
    if quote.category_ids and category_names:
        names = [category_names.get(cid, str(cid)) for cid in quote.category_ids]
        lines.append(f"    [{', '.join(names)}]")
    return "\n".join(lines)


def resolve_category_refs(
    refs: Sequence[str],
    categories: Sequence[Category],
) -> list[int]:
    """Map category names (case-insensitive) or numeric ids onto category ids.

    Raises:
        ValueError: If a reference matches no category.
    """
    by_id = {category.id: category for category in categories if category.id is not None}
    by_key = {category.key: category for category in categories if category.id is not None}
    resolved: list[int] = []
    for ref in refs:
        text = ref.strip()
        category = None
        if text.isdigit():
            category = by_id.get(int(text))
        if category is None:
            category = by_key.get(category_key(text))
        if category is None or category.id is None:
            raise ValueError(f"Unknown category: {ref}")
        if category.id not in resolved:
            resolved.append(category.id)
    return resolved


__all__ = [
    "describe_path",
    "format_quote",
    "mask_secret",
    "print_and_log",
    "resolve_category_refs",
]
