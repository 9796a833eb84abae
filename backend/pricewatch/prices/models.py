"""Data models for the price dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class PricePoint:
    """A single 5-minute price sample. ``price`` is NaN when unparseable."""

    timestamp_ms: int  # UTC epoch milliseconds
    price: float  # cents/kWh

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.price)

    def to_pair(self) -> list:
        """Serialize as the ``[timestamp, price]`` pair the chart series expects."""
        return [self.timestamp_ms, self.price]


@dataclass(frozen=True, slots=True)
class ZoomState:
    """Visible window of the chart, in percent of the data extent.

    ``requested_hours`` is None until a window has been requested.
    """

    start_percent: float = 0.0
    end_percent: float = 100.0
    requested_hours: float | None = None


@dataclass(frozen=True, slots=True)
class AggregateResult:
    """Average price over the visible window, plus its human-readable label."""

    average: float
    range_label: str
    start_ms: float
    end_ms: float

    def to_dict(self) -> dict:
        return {
            "average": None if math.isnan(self.average) else self.average,
            "range_label": self.range_label,
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
        }


class SeriesType(str, Enum):
    """How the price series is drawn."""

    BARS = "bar"
    AREA_LINE = "line"


@dataclass(frozen=True, slots=True)
class SizeContext:
    """Responsive size inputs. Fonts are derived proportionally from the base size."""

    base_font_size: float = 16.0

    @property
    def title_font_size(self) -> float:
        return 1.4 * self.base_font_size

    @property
    def name_font_size(self) -> float:
        return 0.875 * self.base_font_size

    @property
    def label_font_size(self) -> float:
        return 0.75 * self.base_font_size


@dataclass(frozen=True, slots=True)
class ThemeTokens:
    """Theme-dependent colours, resolved from a token source on demand."""

    text_color: str
    grid_line_color: str
    tooltip_background: str
    tooltip_border: str
    price_color_low: str
    price_color_medium: str
    price_color_high: str
    price_color_default: str
