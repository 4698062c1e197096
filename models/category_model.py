"""Category metadata models and helpers.

Updates: v0.2.0 - 2026-09-14 - Replace slug-based categories with named quote categories.
Updates: v0.1.0 - 2026-08-30 - Introduce Category dataclass and helpers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalise_category_name(value: Optional[str]) -> str:
    """Return *value* stripped with internal whitespace collapsed."""

    text = (value or "").strip()
    if not text:
        return ""
    return _WHITESPACE_PATTERN.sub(" ", text)


def category_key(value: Optional[str]) -> str:
    """Return the case-insensitive lookup key for a category name."""

    return normalise_category_name(value).casefold()


@dataclass(slots=True)
class Category:
    """Named bucket used to group quotes."""

    id: Optional[int]
    name: str

    def __post_init__(self) -> None:
        """Normalise the name and ensure it is not blank."""

        name = normalise_category_name(self.name)
        if not name:
            raise ValueError("category name cannot be empty")
        self.name = name

    @property
    def key(self) -> str:
        return category_key(self.name)

    def to_record(self) -> dict[str, Any]:
        """Serialize the category into a plain dictionary."""

        return {"id": self.id, "name": self.name}

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> "Category":
        """Hydrate a Category from a mapping."""

        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            name=str(data.get("name") or ""),
        )


__all__ = ["Category", "category_key", "normalise_category_name"]
