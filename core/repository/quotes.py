"""Quote persistence helpers.

Updates:
  v0.2.1 - 2026-09-20 - Add batch insert and duplicate text lookup for bulk import.
  v0.2.0 - 2026-09-14 - Persist category associations alongside quotes.
  v0.1.0 - 2026-08-30 - Extract quote CRUD and random selection into mixin.
"""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from models.quote_model import Quote

from .base import (
    RepositoryError,
    RepositoryNotFoundError,
    connect as _connect,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

_SELECT_QUOTES = """
    SELECT q.id, q.text, q.author, q.created_at,
           GROUP_CONCAT(qc.category_id) AS category_ids
    FROM quotes q
    LEFT JOIN quote_categories qc ON qc.quote_id = q.id
"""


class QuoteStoreMixin:
    """CRUD and selection helpers for quotes."""

    _db_path: Path

    def add_quote(self, quote: Quote) -> Quote:
        """Insert *quote* and return a copy carrying its new identifier."""
        try:
            with _connect(self._db_path) as conn:
                stored = self._insert_quote(conn, quote)
        except sqlite3.IntegrityError as exc:
            raise RepositoryError("Quote references an unknown category") from exc
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to insert quote") from exc
        return stored

    def add_quotes(self, quotes: Sequence[Quote]) -> list[Quote]:
        """Insert *quotes* in a single transaction."""
        if not quotes:
            return []
        try:
            with _connect(self._db_path) as conn:
                stored = [self._insert_quote(conn, quote) for quote in quotes]
        except sqlite3.IntegrityError as exc:
            raise RepositoryError("Quote batch references an unknown category") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert {len(quotes)} quotes") from exc
        return stored

    def update_quote(self, quote: Quote) -> Quote:
        """Update text, author, and categories of an existing quote."""
        if quote.id is None:
            raise RepositoryNotFoundError("Cannot update a quote without an id")
        try:
            with _connect(self._db_path) as conn:
                updated = conn.execute(
                    "UPDATE quotes SET text = ?, author = ? WHERE id = ?;",
                    (quote.text, quote.author, quote.id),
                ).rowcount
                if updated:
                    conn.execute("DELETE FROM quote_categories WHERE quote_id = ?;", (quote.id,))
                    self._link_categories(conn, quote.id, quote.category_ids)
        except sqlite3.IntegrityError as exc:
            raise RepositoryError(f"Quote {quote.id} references an unknown category") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to update quote {quote.id}") from exc
        if updated == 0:
            raise RepositoryNotFoundError(f"Quote {quote.id} not found")
        return quote

    def delete_quote(self, quote_id: int) -> None:
        """Delete a quote (category links cascade)."""
        try:
            with _connect(self._db_path) as conn:
                deleted = conn.execute("DELETE FROM quotes WHERE id = ?;", (quote_id,)).rowcount
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete quote {quote_id}") from exc
        if deleted == 0:
            raise RepositoryNotFoundError(f"Quote {quote_id} not found")

    def get_quote(self, quote_id: int) -> Quote | None:
        """Return a quote by identifier, or ``None`` when it does not exist."""
        return self._fetch_one(
            f"{_SELECT_QUOTES} WHERE q.id = ? GROUP BY q.id;",
            (quote_id,),
            f"Failed to load quote {quote_id}",
        )

    def list_quotes(self, category_id: int | None = None) -> list[Quote]:
        """Return stored quotes, newest first, optionally limited to one category."""
        query = _SELECT_QUOTES
        params: tuple[object, ...] = ()
        if category_id is not None:
            query += (
                " WHERE q.id IN (SELECT quote_id FROM quote_categories WHERE category_id = ?)"
            )
            params = (category_id,)
        query += " GROUP BY q.id ORDER BY q.created_at DESC, q.id DESC;"
        try:
            with _connect(self._db_path) as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list quotes") from exc
        return [self._row_to_quote(row) for row in rows]

    def count_quotes(self) -> int:
        """Return the number of stored quotes."""
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute("SELECT COUNT(*) AS total FROM quotes;").fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to count quotes") from exc
        return int(row["total"]) if row else 0

    def get_random_quote(self) -> Quote | None:
        """Return a uniformly random quote, or ``None`` when the store is empty."""
        return self._fetch_one(
            f"{_SELECT_QUOTES} "
            "WHERE q.id = (SELECT id FROM quotes ORDER BY RANDOM() LIMIT 1) "
            "GROUP BY q.id;",
            (),
            "Failed to select a random quote",
        )

    def get_random_quote_excluding(self, quote_id: int) -> Quote | None:
        """Return a random quote other than *quote_id*.

        Falls back to the excluded quote itself when it is the only one stored.
        """
        quote = self._fetch_one(
            f"{_SELECT_QUOTES} "
            "WHERE q.id = (SELECT id FROM quotes WHERE id != ? ORDER BY RANDOM() LIMIT 1) "
            "GROUP BY q.id;",
            (quote_id,),
            f"Failed to select a random quote excluding {quote_id}",
        )
        if quote is None:
            return self.get_quote(quote_id)
        return quote

    def quote_text_exists(self, text: str) -> bool:
        """Return ``True`` when a quote with the same text (ignoring case) exists."""
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT 1 FROM quotes WHERE lower(text) = lower(?) LIMIT 1;",
                    (text.strip(),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to look up quote text") from exc
        return row is not None

    def _insert_quote(self, conn: sqlite3.Connection, quote: Quote) -> Quote:
        record = quote.to_record()
        cursor = conn.execute(
            "INSERT INTO quotes (text, author, created_at) VALUES (?, ?, ?);",
            (record["text"], record["author"], record["created_at"]),
        )
        quote_id = int(cursor.lastrowid or 0)
        self._link_categories(conn, quote_id, quote.category_ids)
        return replace(quote, id=quote_id)

    def _link_categories(
        self,
        conn: sqlite3.Connection,
        quote_id: int,
        category_ids: Iterable[int],
    ) -> None:
        conn.executemany(
            "INSERT OR IGNORE INTO quote_categories (quote_id, category_id) VALUES (?, ?);",
            [(quote_id, category_id) for category_id in category_ids],
        )

    def _fetch_one(self, query: str, params: tuple[object, ...], message: str) -> Quote | None:
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(query, params).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(message) from exc
        if row is None:
            return None
        return self._row_to_quote(row)

    def _row_to_quote(self, row: sqlite3.Row) -> Quote:
        """Hydrate Quote from SQLite row."""
        payload = {column: row[column] for column in row.keys()}
        return Quote.from_record(payload)


__all__ = ["QuoteStoreMixin"]
