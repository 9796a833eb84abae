"""Theme- and size-dependent chart options."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import tzinfo

from . import palettes
from .formatting import DEFAULT_TIMEZONE, format_short_date, format_time, to_local
from .interface import ChartEngine, TokenSource
from .models import PricePoint, SeriesType, SizeContext, ThemeTokens
from .series import SeriesTypeSwitch, build_series_option
from .store import SeriesStore
from .theme import resolve_tokens
from .zoom import ZoomController

logger = logging.getLogger(__name__)

CHART_TITLE = "ComEd 5-Minute Electricity Prices (¢/kWh)"
TRANSPARENT = "#00000000"


def build_chart_options(
    tokens: ThemeTokens,
    size: SizeContext,
    series_type: SeriesType,
    points: Sequence[PricePoint],
    tz: tzinfo = DEFAULT_TIMEZONE,
) -> dict:
    """Full declarative chart configuration.

    Depends only on its arguments; nothing is read from global state.
    Formatters are plain callables taking the raw values.
    """

    def tooltip_formatter(timestamp_ms: float, price: float, marker: str = "") -> str:
        moment = to_local(timestamp_ms, tz)
        return (
            f"{format_short_date(moment)}, {format_time(moment)}<br/>"
            f"{marker}<strong>{float(price):.1f} ¢</strong>"
        )

    def time_tick_formatter(timestamp_ms: float) -> str:
        return format_time(to_local(timestamp_ms, tz))

    def price_tick_formatter(value: float) -> str:
        return f"{float(value):.1f} ¢"

    def price_pointer_formatter(value: float) -> str:
        v = float(value)
        return f"{v:.1f} ¢/kWh" if math.isfinite(v) else ""

    return {
        "title": {
            "left": "center",
            "text": CHART_TITLE,
            "textStyle": {"fontSize": size.title_font_size, "color": tokens.text_color},
            "top": 0,
        },
        "toolbox": {
            "right": 5,
            "top": 0,
            "feature": {
                "itemGap": 0,
                "saveAsImage": {"type": "svg", "name": "comed-5-minute-prices", "title": "Save"},
            },
        },
        "tooltip": {
            "trigger": "axis",
            "backgroundColor": tokens.tooltip_background,
            "borderColor": tokens.tooltip_border,
            "borderWidth": 1,
            "axisPointer": {
                "type": "cross",
                "lineStyle": {"color": tokens.tooltip_border},
                "crossStyle": {"color": tokens.tooltip_border},
                "label": {"color": tokens.text_color, "backgroundColor": tokens.tooltip_background},
            },
            "textStyle": {"fontSize": size.label_font_size, "color": tokens.text_color},
            "formatter": tooltip_formatter,
        },
        # Bottom margin leaves room for the range-selector slider
        "grid": {"left": "50px", "right": "1%", "top": "40px", "bottom": "130px"},
        "xAxis": {
            "type": "time",
            "name": "",
            "nameLocation": "middle",
            "nameGap": 30,
            "nameTextStyle": {"fontSize": size.name_font_size, "color": tokens.text_color},
            "axisLine": {"lineStyle": {"color": tokens.grid_line_color}},
            "axisLabel": {
                "fontSize": size.label_font_size,
                "color": tokens.text_color,
                "formatter": time_tick_formatter,
            },
            "axisPointer": {"label": {"show": True, "formatter": time_tick_formatter}},
        },
        "yAxis": {
            "type": "value",
            "name": "",
            "nameLocation": "middle",
            "nameGap": 0,
            "nameTextStyle": {"fontSize": size.name_font_size, "color": tokens.text_color},
            "axisLine": {"lineStyle": {"color": tokens.grid_line_color}},
            "splitLine": {"show": True, "lineStyle": {"color": tokens.grid_line_color}},
            "axisLabel": {
                "formatter": price_tick_formatter,
                "fontSize": size.label_font_size,
                "color": tokens.text_color,
            },
            "axisPointer": {"label": {"show": True, "formatter": price_pointer_formatter}},
        },
        "dataZoom": [
            {"type": "inside", "orient": "horizontal", "xAxisIndex": 0},
            {
                "type": "slider",
                "xAxisIndex": 0,
                "height": 100,
                "bottom": 0,
                "handleSize": "40%",
                "borderColor": TRANSPARENT,
                "dataBackground": {"areaStyle": {"color": TRANSPARENT}, "lineStyle": {"width": 0.5}},
                "selectedDataBackground": {"areaStyle": {"color": TRANSPARENT}, "lineStyle": {"width": 2}},
            },
        ],
        "visualMap": {
            "type": "piecewise",
            "show": False,
            "dimension": 1,
            "pieces": [
                {"lt": palettes.PRICE_THRESHOLD_LOW, "color": tokens.price_color_low},
                {
                    "gte": palettes.PRICE_THRESHOLD_LOW,
                    "lt": palettes.PRICE_THRESHOLD_HIGH,
                    "color": tokens.price_color_medium,
                },
                {"gte": palettes.PRICE_THRESHOLD_HIGH, "color": tokens.price_color_high},
            ],
        },
        "series": [build_series_option(series_type, points)],
    }


class StyleResolver:
    """Recomputes the chart options whenever the theme or size changes.

    Tokens are read from the token source on every call; nothing is cached
    across theme changes.
    """

    def __init__(
        self,
        engine: ChartEngine,
        tokens: TokenSource,
        store: SeriesStore,
        series: SeriesTypeSwitch,
        zoom: ZoomController,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ) -> None:
        self._engine = engine
        self._tokens = tokens
        self._store = store
        self._series = series
        self._zoom = zoom
        self._tz = tz

    def tokens(self) -> ThemeTokens:
        return resolve_tokens(self._tokens)

    def compute_options(self, size: SizeContext) -> dict:
        return build_chart_options(
            self.tokens(),
            size,
            self._series.series_type,
            self._store.all(),
            self._tz,
        )

    def apply_full_refresh(self, size: SizeContext) -> None:
        """Replace every chart option, then restore the zoom window.

        A non-merging replacement resets the engine's zoom, so the zoom
        controller re-issues its last requested window afterwards.
        """
        self._engine.set_options(self.compute_options(size), non_merging=True)
        self._zoom.reapply()
        logger.debug("Chart options fully refreshed (base font %.1fpx)", size.base_font_size)
