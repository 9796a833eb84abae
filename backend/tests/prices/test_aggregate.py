"""Tests for RangeAggregator and range labels."""

import math
from unittest.mock import MagicMock

import pytest
from conftest import UTC, make_day, ms

from pricewatch.prices.aggregate import RangeAggregator, aggregate_window
from pricewatch.prices.engine import InMemoryChartEngine
from pricewatch.prices.formatting import format_range_label
from pricewatch.prices.models import PricePoint
from pricewatch.prices.store import SeriesStore
from pricewatch.prices.zoom import ZoomController

T1 = ms(10, 0)
T2 = ms(10, 5)
T3 = ms(10, 10)
SAMPLES = [PricePoint(T1, 5.0), PricePoint(T2, 10.0), PricePoint(T3, 20.0)]


def _aggregator(card, points=SAMPLES, extent=(T1, T3)):
    engine = MagicMock()
    engine.get_visible_axis_extent.return_value = extent
    store = SeriesStore()
    store.replace(points)
    return RangeAggregator(engine, store, card, tz=UTC), engine


class TestAggregateWindow:
    """Unit tests for the pure averaging function."""

    def test_inclusive_bounds(self):
        """Test that both ends of the window are included."""
        result = aggregate_window(SAMPLES, T1, T2, UTC)
        assert result.average == 7.5

    def test_single_instant(self):
        """Test that a single-instant window averages to that point's price."""
        result = aggregate_window(SAMPLES, T2, T2, UTC)
        assert result.average == 10.0

    def test_no_points_in_window(self):
        """Test that an empty window yields no result."""
        assert aggregate_window(SAMPLES, ms(20), ms(21), UTC) is None

    def test_nan_propagates(self):
        """Test that NaN prices are not skipped."""
        points = [PricePoint(T1, 5.0), PricePoint(T2, math.nan)]
        result = aggregate_window(points, T1, T2, UTC)
        assert math.isnan(result.average)

    def test_records_window(self):
        """Test that the result carries the window bounds."""
        result = aggregate_window(SAMPLES, T1, T3, UTC)
        assert (result.start_ms, result.end_ms) == (T1, T3)


class TestRangeLabel:
    """Tests for the human-readable window label."""

    def test_single_instant_includes_date(self):
        """Test that a single instant always shows the short date."""
        assert format_range_label(ms(14, 5), ms(14, 5), UTC) == "Oct 18 14:05"

    def test_same_day(self):
        """Test a window inside one calendar day."""
        assert format_range_label(ms(9, 0), ms(13, 30), UTC) == "09:00-13:30"

    def test_different_days(self):
        """Test a window spanning midnight."""
        label = format_range_label(ms(22, 0, day=17), ms(1, 5, day=18), UTC)
        assert label == "Oct 17 22:00–Oct 18 01:05"

    def test_uses_timezone(self):
        """Test that days are split in the display timezone."""
        from zoneinfo import ZoneInfo

        chicago = ZoneInfo("America/Chicago")
        # 03:00-04:00 UTC is the previous evening in Chicago, same calendar day
        assert format_range_label(ms(3, 0), ms(4, 0), chicago) == "22:00-23:00"


class TestRangeAggregator:
    """Tests for pushing the visible-window aggregate to the card."""

    def test_pushes_average_and_label(self, card):
        """Test that recompute updates the card price and title."""
        aggregator, _ = _aggregator(card, extent=(T1, T2))
        result = aggregator.recompute()

        assert result.average == 7.5
        assert card.calls == [("price", 7.5), ("title", "10:00-10:05")]
        assert aggregator.latest is result

    def test_single_point_extent(self, card):
        """Test an extent covering exactly one sample."""
        aggregator, _ = _aggregator(card, extent=(T2, T2))
        aggregator.recompute()
        assert card.calls == [("price", 10.0), ("title", "Oct 18 10:05")]

    def test_extent_outside_keeps_previous(self, card):
        """Test that an empty window leaves the previous aggregate in place."""
        aggregator, engine = _aggregator(card, extent=(T1, T2))
        aggregator.recompute()
        card.calls.clear()

        engine.get_visible_axis_extent.return_value = (ms(20), ms(21))
        assert aggregator.recompute() is None
        assert card.calls == []
        assert aggregator.latest.average == 7.5

    def test_empty_store_no_mutation(self, card):
        """Test that an empty series never touches the card."""
        aggregator, _ = _aggregator(card, points=[])
        assert aggregator.recompute() is None
        assert card.calls == []

    def test_unavailable_extent_no_mutation(self, card):
        """Test that a missing extent never touches the card."""
        aggregator, _ = _aggregator(card, extent=None)
        assert aggregator.recompute() is None
        assert card.calls == []

    def test_registers_for_range_changes(self, card):
        """Test that the aggregator subscribes to visible-range changes."""
        aggregator, engine = _aggregator(card)
        engine.on_visible_range_changed.assert_called_once_with(aggregator.recompute)

    def test_follows_zoom_events(self, card):
        """Test end to end that zooming recomputes through the engine event."""
        engine = InMemoryChartEngine()
        store = SeriesStore()
        points = make_day(ms(0))
        store.replace(points)
        engine.set_options({"series": [{"data": [p.to_pair() for p in points]}]})
        aggregator = RangeAggregator(engine, store, card, tz=UTC)

        ZoomController(engine).set_window(3)

        lo, hi = engine.get_visible_axis_extent()
        visible = [p.price for p in points if lo <= p.timestamp_ms <= hi]
        assert aggregator.latest.average == pytest.approx(sum(visible) / len(visible))
        assert card.calls[-1] == ("title", aggregator.latest.range_label)
