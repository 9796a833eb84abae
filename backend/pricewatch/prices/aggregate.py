"""Average price over whatever window the chart currently shows."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import tzinfo

from .formatting import DEFAULT_TIMEZONE, format_range_label
from .interface import ChartEngine, SummaryCard
from .models import AggregateResult, PricePoint
from .store import SeriesStore

logger = logging.getLogger(__name__)


def aggregate_window(
    points: Sequence[PricePoint],
    min_time: float,
    max_time: float,
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> AggregateResult | None:
    """Mean price of the points with ``min_time <= t <= max_time``.

    NaN prices are not skipped, so a single NaN makes the average NaN.
    Returns None when no point falls inside the window.
    """
    visible = [p.price for p in points if min_time <= p.timestamp_ms <= max_time]
    if not visible:
        return None
    average = sum(visible) / len(visible)
    return AggregateResult(
        average=average,
        range_label=format_range_label(min_time, max_time, tz),
        start_ms=min_time,
        end_ms=max_time,
    )


class RangeAggregator:
    """Keeps the "selected range" card in step with the chart's visible window.

    Call ``recompute()`` after every series replacement; it is also wired to
    the engine's visible-range-changed event. When there is nothing to show
    (no data, no extent, empty window) the card keeps its previous values.
    """

    def __init__(
        self,
        engine: ChartEngine,
        store: SeriesStore,
        card: SummaryCard,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ) -> None:
        self._engine = engine
        self._store = store
        self._card = card
        self._tz = tz
        self._latest: AggregateResult | None = None
        engine.on_visible_range_changed(self.recompute)

    @property
    def latest(self) -> AggregateResult | None:
        """The most recent result pushed to the card, if any."""
        return self._latest

    def recompute(self) -> AggregateResult | None:
        points = self._store.all()
        if not points:
            return None
        extent = self._engine.get_visible_axis_extent()
        if extent is None:
            return None

        min_time, max_time = extent
        result = aggregate_window(points, min_time, max_time, self._tz)
        if result is None:
            logger.debug("No samples in visible window [%s, %s]; keeping previous aggregate", min_time, max_time)
            return None

        self._latest = result
        self._card.set_price(result.average)
        self._card.set_title(result.range_label)
        return result
