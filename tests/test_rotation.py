"""Tests for the daily quote rotation engine.

Updates:
  v0.2.0 - 2026-09-06 - Use recording fakes to assert store calls and writes.
  v0.1.0 - 2026-08-30 - Cover stability, day changes and dangling ids.
"""

from __future__ import annotations

import random
from datetime import date
from typing import TYPE_CHECKING

import pytest

from core.rotation import RotationEngine, local_date_string
from models.quote_model import Quote
from models.wallpaper import WallpaperStyle

if TYPE_CHECKING:
    from core.stores import SQLiteQuoteStore


class _FakeQuoteStore:
    """In-memory quote store that records every call by name."""

    def __init__(self, ids: list[int]) -> None:
        self.quotes = {quote_id: Quote(id=quote_id, text=f"Quote {quote_id}") for quote_id in ids}
        self.calls: list[str] = []
        self._random = random.Random(7)

    async def count_quotes(self) -> int:
        self.calls.append("count_quotes")
        return len(self.quotes)

    async def get_quote_by_id(self, quote_id: int) -> Quote | None:
        self.calls.append("get_quote_by_id")
        return self.quotes.get(quote_id)

    async def get_random_quote(self) -> Quote | None:
        self.calls.append("get_random_quote")
        if not self.quotes:
            return None
        return self.quotes[self._random.choice(sorted(self.quotes))]

    async def get_random_quote_excluding(self, quote_id: int) -> Quote | None:
        self.calls.append(f"get_random_quote_excluding:{quote_id}")
        others = sorted(key for key in self.quotes if key != quote_id)
        if not others:
            return self.quotes.get(quote_id)
        return self.quotes[self._random.choice(others)]

    async def list_all_quotes(self) -> list[Quote]:
        return list(self.quotes.values())


class _FakeSettingsStore:
    """In-memory settings store that records every write."""

    def __init__(self, current_id: int | None = None, last_date: str | None = None) -> None:
        self.values: dict[str, str] = {}
        if current_id is not None:
            self.values["current_quote_id"] = str(current_id)
        if last_date is not None:
            self.values["last_quote_date"] = last_date
        self.writes: list[tuple[str, object]] = []

    async def get_setting(self, key: str) -> str | None:
        return self.values.get(key)

    async def set_setting(self, key: str, value: str) -> None:
        self.writes.append(("set", key))
        self.values[key] = value

    async def delete_setting(self, key: str) -> None:
        self.writes.append(("delete", key))
        self.values.pop(key, None)

    async def get_current_quote_id(self) -> int | None:
        value = self.values.get("current_quote_id")
        return int(value) if value is not None else None

    async def get_last_quote_date(self) -> str | None:
        return self.values.get("last_quote_date")

    async def set_rotation_state(self, quote_id: int, quote_date: str) -> None:
        self.writes.append(("rotation", (quote_id, quote_date)))
        self.values["current_quote_id"] = str(quote_id)
        self.values["last_quote_date"] = quote_date

    async def clear_current_quote_id(self) -> None:
        await self.delete_setting("current_quote_id")

    async def get_wallpaper_style(self) -> WallpaperStyle:
        return WallpaperStyle.DARK

    async def set_wallpaper_style(self, style: WallpaperStyle) -> None:
        self.values["dark_background"] = "true" if style.is_dark else "false"


def _engine(
    quotes: _FakeQuoteStore,
    settings: _FakeSettingsStore,
    day: date = date(2025, 1, 15),
) -> RotationEngine:
    return RotationEngine(quotes, settings, today=lambda: day)


def test_local_date_string_is_zero_padded() -> None:
    assert local_date_string(date(2025, 3, 7)) == "2025-03-07"


@pytest.mark.asyncio()
async def test_daily_quote_rotates_away_from_yesterdays_quote() -> None:
    quotes = _FakeQuoteStore([1, 2])
    settings = _FakeSettingsStore(current_id=1, last_date="2025-01-14")

    quote = await _engine(quotes, settings).get_daily_quote()

    assert quote is not None
    assert quote.id == 2
    assert "get_random_quote_excluding:1" in quotes.calls
    assert "get_random_quote" not in quotes.calls
    assert settings.values["current_quote_id"] == "2"
    assert settings.values["last_quote_date"] == "2025-01-15"
    assert settings.writes == [("rotation", (2, "2025-01-15"))]


@pytest.mark.asyncio()
async def test_should_rotate_compares_local_date() -> None:
    quotes = _FakeQuoteStore([1])
    assert await _engine(quotes, _FakeSettingsStore()).should_rotate() is True
    assert await _engine(quotes, _FakeSettingsStore(1, "2025-01-14")).should_rotate() is True
    assert await _engine(quotes, _FakeSettingsStore(1, "2025-01-15")).should_rotate() is False


@pytest.mark.asyncio()
async def test_rotate_if_needed_is_stable_within_a_day() -> None:
    quotes = _FakeQuoteStore([1, 2, 3, 4])
    settings = _FakeSettingsStore()
    engine = _engine(quotes, settings)

    first = await engine.rotate_if_needed()
    writes_after_first = list(settings.writes)
    for _ in range(5):
        again = await engine.rotate_if_needed()
        assert again is not None and first is not None
        assert again.id == first.id

    assert settings.writes == writes_after_first
    assert len(writes_after_first) == 1


@pytest.mark.asyncio()
async def test_first_run_without_state_picks_any_quote() -> None:
    quotes = _FakeQuoteStore([3])
    settings = _FakeSettingsStore()

    quote = await _engine(quotes, settings).get_daily_quote()

    assert quote is not None and quote.id == 3
    assert "get_random_quote" in quotes.calls
    assert not any(call.startswith("get_random_quote_excluding") for call in quotes.calls)
    assert settings.values == {"current_quote_id": "3", "last_quote_date": "2025-01-15"}


@pytest.mark.asyncio()
async def test_single_quote_survives_day_change() -> None:
    quotes = _FakeQuoteStore([9])
    settings = _FakeSettingsStore(current_id=9, last_date="2025-01-14")

    quote = await _engine(quotes, settings).rotate_if_needed()

    assert quote is not None and quote.id == 9
    assert settings.values["last_quote_date"] == "2025-01-15"


@pytest.mark.asyncio()
async def test_rotate_on_empty_store_writes_nothing() -> None:
    quotes = _FakeQuoteStore([])
    settings = _FakeSettingsStore()

    assert await _engine(quotes, settings).rotate() is None
    assert await _engine(quotes, settings).get_daily_quote() is None
    assert settings.writes == []
    assert settings.values == {}


@pytest.mark.asyncio()
async def test_dangling_id_same_day_rotates_to_existing_quote() -> None:
    quotes = _FakeQuoteStore([2, 3])
    settings = _FakeSettingsStore(current_id=1, last_date="2025-01-15")

    quote = await _engine(quotes, settings).rotate_if_needed()

    assert quote is not None
    assert quote.id in {2, 3}
    assert settings.writes[0] == ("delete", "current_quote_id")
    assert settings.values["current_quote_id"] == str(quote.id)


@pytest.mark.asyncio()
async def test_dangling_id_with_empty_store_returns_none() -> None:
    quotes = _FakeQuoteStore([])
    settings = _FakeSettingsStore(current_id=1, last_date="2025-01-15")

    assert await _engine(quotes, settings).rotate_if_needed() is None
    assert "current_quote_id" not in settings.values


@pytest.mark.asyncio()
async def test_store_errors_propagate() -> None:
    class _BrokenStore(_FakeQuoteStore):
        async def count_quotes(self) -> int:
            raise RuntimeError("disk gone")

    engine = _engine(_BrokenStore([1]), _FakeSettingsStore())
    with pytest.raises(RuntimeError):
        await engine.rotate()
    with pytest.raises(RuntimeError):
        await engine.get_daily_quote()


@pytest.mark.asyncio()
async def test_excluding_pick_without_result_falls_back_to_plain_random() -> None:
    class _NoExclusionStore(_FakeQuoteStore):
        async def get_random_quote_excluding(self, quote_id: int) -> Quote | None:
            self.calls.append(f"get_random_quote_excluding:{quote_id}")
            return None

    quotes = _NoExclusionStore([1, 2, 3])
    settings = _FakeSettingsStore(current_id=1, last_date="2025-01-14")

    quote = await _engine(quotes, settings).get_daily_quote()

    assert quote is not None and quote.id in {1, 2, 3}
    assert quotes.calls[-2:] == ["get_random_quote_excluding:1", "get_random_quote"]
    assert settings.writes == [("rotation", (quote.id, "2025-01-15"))]


@pytest.mark.asyncio()
async def test_rotation_persists_through_sqlite_store(
    engine: RotationEngine,
    quote_store: SQLiteQuoteStore,
    fixed_today: list[date],
) -> None:
    first = await quote_store.add_quote(Quote(id=None, text="First"))
    second = await quote_store.add_quote(Quote(id=None, text="Second"))

    today = await engine.get_daily_quote()
    assert today is not None
    assert (await engine.read_state()).last_quote_date == "2025-01-15"

    fixed_today[0] = date(2025, 1, 16)
    tomorrow = await engine.get_daily_quote()
    assert tomorrow is not None
    assert tomorrow.id != today.id
    assert {today.id, tomorrow.id} == {first.id, second.id}
    state = await engine.read_state()
    assert state.current_quote_id == tomorrow.id
    assert state.last_quote_date == "2025-01-16"
