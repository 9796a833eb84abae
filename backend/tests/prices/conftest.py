"""Shared fixtures and fakes for the price dashboard tests."""

import asyncio
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from pricewatch.prices.interface import PriceFeed, SummaryCard
from pricewatch.prices.models import PricePoint

UTC = ZoneInfo("UTC")
FIVE_MINUTES_MS = 5 * 60 * 1000
HOUR_MS = 60 * 60 * 1000

# 2026-10-18 00:00 UTC
T0 = int(datetime(2026, 10, 18, tzinfo=timezone.utc).timestamp() * 1000)
# Just before the end of that day, so a full day of samples starting at T0 is in the window
NOW_END = T0 + 24 * HOUR_MS - 1


def ms(hour: int, minute: int = 0, day: int = 18) -> int:
    """Epoch ms for a UTC wall-clock time in October 2026."""
    return int(datetime(2026, 10, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


def make_series(start_ms: int, prices: list[float], step_ms: int = FIVE_MINUTES_MS) -> list[PricePoint]:
    return [PricePoint(timestamp_ms=start_ms + i * step_ms, price=p) for i, p in enumerate(prices)]


def make_day(start_ms: int = T0, hours: int = 24) -> list[PricePoint]:
    """One sample every 5 minutes for ``hours`` hours, price = sample index."""
    return make_series(start_ms, [float(i) for i in range(hours * 12)])


def feed_entries(points: list[PricePoint]) -> list[dict]:
    """Raw ComEd-shaped payload for ``points``."""
    return [{"millisUTC": str(p.timestamp_ms), "price": str(p.price)} for p in points]


class RecordingCard(SummaryCard):
    """SummaryCard that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def set_title(self, text: str) -> None:
        self.calls.append(("title", text))

    def set_price(self, value) -> None:
        self.calls.append(("price", value))


class FakeFeed(PriceFeed):
    """PriceFeed returning canned payloads, optionally after a delay or with an error."""

    def __init__(self, samples=None, current=None, delay: float = 0.0, error: Exception | None = None) -> None:
        self.samples = samples or []
        self.current = current or []
        self.delay = delay
        self.error = error
        self.calls = 0
        self.closed = False

    async def fetch_five_minute_feed(self) -> list[dict]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.samples

    async def fetch_current_hour_average(self) -> list[dict]:
        return self.current

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def card() -> RecordingCard:
    return RecordingCard()


@pytest.fixture
def day() -> list[PricePoint]:
    return make_day()
