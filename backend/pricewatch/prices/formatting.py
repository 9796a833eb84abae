"""Text formatting shared by the chart options, aggregator and cards."""

from __future__ import annotations

import math
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = ZoneInfo("America/Chicago")
UNAVAILABLE_TEXT = "N/A"


def to_local(timestamp_ms: float, tz: tzinfo = DEFAULT_TIMEZONE) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz)


def format_time(moment: datetime) -> str:
    """24-hour ``HH:MM``."""
    return f"{moment.hour:02d}:{moment.minute:02d}"


def format_short_date(moment: datetime) -> str:
    """Month abbreviation and day of month, e.g. ``Oct 7``."""
    return f"{moment:%b} {moment.day}"


def parse_price(value: object) -> float:
    """Parse a price leniently. Anything unparseable or infinite becomes NaN."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        price = float(value)
    except (TypeError, ValueError):
        return math.nan
    return price if math.isfinite(price) else math.nan


def format_card_price(value: float) -> str:
    """``12.3¢``, or the unavailable marker for NaN."""
    if math.isnan(value):
        return UNAVAILABLE_TEXT
    return f"{value:.1f}¢"


def format_range_label(min_time: float, max_time: float, tz: tzinfo = DEFAULT_TIMEZONE) -> str:
    """Describe the visible window ``[min_time, max_time]`` (epoch ms).

    A single instant always includes the short date. A window inside one
    calendar day shows ``HH:MM-HH:MM``; a window spanning days shows both
    dates, joined by an en dash.
    """
    start = to_local(min_time, tz)
    end = to_local(max_time, tz)

    if min_time == max_time:
        return f"{format_short_date(start)} {format_time(start)}"
    if start.date() == end.date():
        return f"{format_time(start)}-{format_time(end)}"
    return (
        f"{format_short_date(start)} {format_time(start)}"
        f"–{format_short_date(end)} {format_time(end)}"
    )
