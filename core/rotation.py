"""Daily quote rotation.

The engine picks one "quote of the day" and keeps it stable for the rest of
the local calendar day. The first call on a new day rotates to a different
quote whenever the library holds more than one.

Updates:
  v0.2.2 - 2026-10-17 - Drop the unused background-safe accessor; the job handles failures.
  v0.2.0 - 2026-09-06 - Collapse the secondary random pick into rotate().
  v0.1.0 - 2026-08-30 - Introduce RotationEngine over injected quote/settings stores.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from models.rotation_state import RotationState

if TYPE_CHECKING:
    from collections.abc import Callable

    from models.quote_model import Quote

    from .stores import QuoteStore, SettingsStore

logger = logging.getLogger("quote_wall.rotation")


def local_date_string(day: date) -> str:
    """Return *day* as a zero-padded ``YYYY-MM-DD`` string."""
    return day.isoformat()


class RotationEngine:
    """Select and persist the active quote for the current local day."""

    def __init__(
        self,
        quote_store: QuoteStore,
        settings_store: SettingsStore,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._quotes = quote_store
        self._settings = settings_store
        self._today = today

    def today_string(self) -> str:
        return local_date_string(self._today())

    async def read_state(self) -> RotationState:
        """Return the persisted rotation state (empty on first run)."""
        return RotationState(
            current_quote_id=await self._settings.get_current_quote_id(),
            last_quote_date=await self._settings.get_last_quote_date(),
        )

    async def should_rotate(self) -> bool:
        """Return ``True`` when no quote has been chosen for today yet."""
        last_date = await self._settings.get_last_quote_date()
        return last_date != self.today_string()

    async def rotate(self) -> Quote | None:
        """Pick a new active quote and persist it for today.

        Returns ``None`` without writing anything when the library is empty.
        """
        count = await self._quotes.count_quotes()
        if count == 0:
            logger.info("Quote library is empty; nothing to rotate")
            return None

        current_id = await self._settings.get_current_quote_id()
        quote: Quote | None = None
        if current_id is not None and count > 1:
            quote = await self._quotes.get_random_quote_excluding(current_id)
        if quote is None:
            quote = await self._quotes.get_random_quote()
        if quote is None or quote.id is None:
            # library emptied between the count and the pick
            logger.warning("Quote store returned no quote despite a count of %d", count)
            return None

        today = self.today_string()
        await self._settings.set_rotation_state(quote.id, today)
        logger.info("Rotated daily quote %s -> %s for %s", current_id, quote.id, today)
        return quote

    async def rotate_if_needed(self) -> Quote | None:
        """Return today's quote, rotating only when the stored one is stale or gone."""
        state = await self.read_state()
        current = state.is_current(self.today_string())

        if current and state.current_quote_id is not None:
            quote = await self._quotes.get_quote_by_id(state.current_quote_id)
            if quote is not None:
                return quote
            logger.info(
                "Active quote %s no longer exists; clearing it and rotating",
                state.current_quote_id,
            )
            await self._settings.clear_current_quote_id()

        return await self.rotate()

    async def get_daily_quote(self) -> Quote | None:
        """Return today's quote, persisting a selection whenever quotes exist."""
        return await self.rotate_if_needed()


__all__ = ["RotationEngine", "local_date_string"]
