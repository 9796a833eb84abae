"""Wires the store, zoom, aggregate, series type and style into one dashboard."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable, Sequence
from datetime import tzinfo

from .aggregate import RangeAggregator
from .cards import CURRENT_HOUR, LAST_24_HOURS, SELECTED_RANGE, PriceCard
from .engine import InMemoryChartEngine
from .formatting import DEFAULT_TIMEZONE, parse_price
from .interface import ChartEngine, PriceFeed, TokenSource
from .models import PricePoint, SeriesType, SizeContext
from .series import SeriesTypeSwitch
from .store import SeriesStore
from .style import StyleResolver
from .theme import ThemedTokenSource, ThemeSignal
from .zoom import ZoomController

logger = logging.getLogger(__name__)

HISTORY_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


def _parse_millis(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if math.isfinite(number) else None


def parse_samples(entries: Sequence[object], cutoff_ms: int) -> list[PricePoint]:
    """Turn raw feed entries into PricePoints newer than ``cutoff_ms``.

    Entries with a missing or malformed timestamp are dropped; a malformed
    price becomes NaN. Source order is kept.
    """
    points: list[PricePoint] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        timestamp = _parse_millis(entry.get("millisUTC"))
        if timestamp is None or timestamp <= cutoff_ms:
            continue
        points.append(PricePoint(timestamp_ms=timestamp, price=parse_price(entry.get("price"))))
    return points


def current_hour_price(current_hour: Sequence[object], points: Sequence[PricePoint]) -> float:
    """The settled current-hour price, else the latest sample, else NaN."""
    # The feed sometimes answers with an object instead of a one-entry list
    if isinstance(current_hour, (list, tuple)) and current_hour:
        first = current_hour[0]
        if isinstance(first, dict) and first.get("price") is not None:
            return parse_price(first["price"])
    if points:
        return points[-1].price
    return math.nan


def average_price(points: Sequence[PricePoint]) -> float:
    """Mean of all prices, NaN included. NaN for an empty sequence."""
    if not points:
        return math.nan
    return sum(p.price for p in points) / len(points)


class PriceDashboard:
    """The whole dashboard state, driven by refreshes and user commands.

    All collaborators are created here or passed in; nothing is looked up
    globally. Every method except ``refresh`` is synchronous.
    """

    def __init__(
        self,
        feed: PriceFeed,
        engine: ChartEngine | None = None,
        theme: ThemeSignal | None = None,
        tokens: TokenSource | None = None,
        size: SizeContext | None = None,
        tz: tzinfo = DEFAULT_TIMEZONE,
        now_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._feed = feed
        self._now_ms = now_ms
        self.engine = engine or InMemoryChartEngine()
        self.theme = theme or ThemeSignal()
        self.tokens = tokens or ThemedTokenSource(self.theme)
        self._size = size or SizeContext()

        self.current_hour = PriceCard(CURRENT_HOUR, self.tokens)
        self.selected_range = PriceCard(SELECTED_RANGE, self.tokens)
        self.last_24_hours = PriceCard(LAST_24_HOURS, self.tokens)

        self.store = SeriesStore()
        self.zoom = ZoomController(self.engine)
        self.series = SeriesTypeSwitch(self.engine, self.store)
        self.aggregator = RangeAggregator(self.engine, self.store, self.selected_range, tz)
        self.style = StyleResolver(self.engine, self.tokens, self.store, self.series, self.zoom, tz)

        # Request sequencing: a response older than the last applied one is dropped
        self._issued_seq = 0
        self._applied_seq = 0

        self.engine.set_options(self.style.compute_options(self._size))

    @property
    def cards(self) -> tuple[PriceCard, PriceCard, PriceCard]:
        return self.current_hour, self.selected_range, self.last_24_hours

    @property
    def size(self) -> SizeContext:
        return self._size

    # --- Data ---

    async def refresh(self) -> bool:
        """Fetch both feeds and apply them. Returns False if nothing was applied.

        Failures are logged and leave the current display untouched.
        """
        self._issued_seq += 1
        seq = self._issued_seq
        try:
            samples, current = await asyncio.gather(
                self._feed.fetch_five_minute_feed(),
                self._feed.fetch_current_hour_average(),
            )
        except Exception:
            logger.exception("Error updating price data (request #%d)", seq)
            return False

        if seq < self._applied_seq:
            logger.warning("Discarding stale response #%d (already applied #%d)", seq, self._applied_seq)
            return False
        self._applied_seq = seq
        self.apply_feed(samples, current)
        return True

    def apply_feed(self, samples: Sequence[object], current_hour: Sequence[object]) -> None:
        """Update the chart, then the peripheral cards, from raw feed payloads."""
        points = parse_samples(samples, self._now_ms() - HISTORY_MS)
        self.update_data(points)
        self.current_hour.set_price(current_hour_price(current_hour, points))
        self.last_24_hours.set_price(average_price(points))
        logger.debug("Applied %d samples", len(points))

    def update_data(self, points: Sequence[PricePoint]) -> None:
        """Replace the series, keep zoom, then refresh the selected-range card."""
        self.store.replace(points)
        self.engine.set_options({"series": [self.series.series_option()]})
        self.zoom.on_series_replaced(self.store.all())
        self.aggregator.recompute()
        self.engine.resize()

    # --- User commands ---

    def set_zoom(self, hours: object) -> bool:
        return self.zoom.set_window(hours)

    def set_series_type(self, series_type: SeriesType) -> bool:
        return self.series.set_type(series_type)

    def set_system_dark(self, prefers_dark: bool) -> None:
        if self.theme.set_system_preference(prefers_dark):
            self.refresh_theme()

    def toggle_theme(self) -> bool:
        dark = self.theme.toggle()
        self.refresh_theme()
        return dark

    def resize(self, size: SizeContext | None = None) -> None:
        """Container resized. A new base font size needs a full re-render."""
        if size is not None and size != self._size:
            self._size = size
            self.refresh_theme()
        else:
            self.engine.resize()

    def refresh_theme(self) -> None:
        """Re-render everything that depends on theme tokens or size."""
        self.style.apply_full_refresh(self._size)
        self.engine.resize()
        for card in self.cards:
            card.refresh_theme_background()
        # The reset zoom may not have been re-issued (no window requested yet)
        self.aggregator.recompute()

    # --- Serialization ---

    def snapshot(self) -> dict:
        aggregate = self.aggregator.latest
        zoom = self.zoom.state
        snapshot = {
            "version": self.store.version,
            "points": len(self.store),
            "series_type": self.series.series_type.value,
            "zoom": {
                "start_percent": zoom.start_percent,
                "end_percent": zoom.end_percent,
                "requested_hours": zoom.requested_hours,
            },
            "aggregate": aggregate.to_dict() if aggregate else None,
            "cards": [card.to_dict() for card in self.cards],
            "theme": self.theme.to_dict(),
        }
        if isinstance(self.engine, InMemoryChartEngine):
            snapshot["chart"] = self.engine.snapshot()
        return snapshot

    async def close(self) -> None:
        await self._feed.close()
