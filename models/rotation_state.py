"""Persisted daily rotation state.

Updates: v0.1.0 - 2026-08-30 - Add RotationState snapshot of the active quote selection.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RotationState:
    """Snapshot of the active quote id and the local date it was chosen on."""

    current_quote_id: int | None = None
    last_quote_date: str | None = None

    def is_current(self, today: str) -> bool:
        """Return ``True`` when the selection was made on *today* (``YYYY-MM-DD``)."""
        return self.last_quote_date == today


__all__ = ["RotationState"]
