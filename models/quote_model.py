"""Quote data model definitions.

Updates:
  v0.2.0 - 2026-09-14 - Track multiple category associations per quote.
  v0.1.0 - 2026-08-30 - Add Quote dataclass with SQLite record helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalise_category_ids(value: Iterable[Any] | None) -> list[int]:
    """Coerce category identifiers into a deduplicated list of integers."""
    ids: list[int] = []
    if value is None:
        return ids
    for raw in value:
        if raw is None or raw == "":
            continue
        candidate = int(raw)
        if candidate not in ids:
            ids.append(candidate)
    return ids


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value in (None, ""):
        return _utc_now()
    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        # SQLite CURRENT_TIMESTAMP uses a space separator
        parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(slots=True)
class Quote:
    """A single quote stored in the local library."""

    id: int | None
    text: str
    author: str | None = None
    category_ids: list[int] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Normalise text fields and reject empty quotes."""
        text = (self.text or "").strip()
        if not text:
            raise ValueError("quote text cannot be empty")
        self.text = text
        self.author = _clean_optional_text(self.author)
        self.category_ids = _normalise_category_ids(self.category_ids)

    def to_record(self) -> dict[str, Any]:
        """Return a mapping suitable for SQLite persistence."""
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(
        cls,
        data: dict[str, Any],
        category_ids: Iterable[Any] | None = None,
    ) -> Quote:
        """Hydrate a Quote from a stored mapping."""
        raw_id = data.get("id")
        if category_ids is None:
            raw_categories = data.get("category_ids")
            if isinstance(raw_categories, str):
                category_ids = [part for part in raw_categories.split(",") if part.strip()]
            else:
                category_ids = raw_categories
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            text=str(data.get("text") or ""),
            author=data.get("author"),
            category_ids=_normalise_category_ids(category_ids),
            created_at=_parse_timestamp(data.get("created_at")),
        )


__all__ = ["Quote"]
