"""Bar vs. smoothed-area representation of the price series."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .interface import ChartEngine
from .models import PricePoint, SeriesType
from .store import SeriesStore

logger = logging.getLogger(__name__)

AREA_LINE_WIDTH = 3


def build_series_option(series_type: SeriesType, points: Sequence[PricePoint]) -> dict:
    """Declarative series option for ``points`` drawn as ``series_type``."""
    option: dict = {
        "name": "Price",
        "data": [p.to_pair() for p in points],
        "type": series_type.value,
    }
    if series_type is SeriesType.AREA_LINE:
        option["smooth"] = True
        option["showSymbol"] = False
        option["lineStyle"] = {"width": AREA_LINE_WIDTH}
        option["areaStyle"] = {}
    return option


class SeriesTypeSwitch:
    """Owns the current SeriesType. Changing it never touches data or zoom."""

    def __init__(
        self,
        engine: ChartEngine,
        store: SeriesStore,
        series_type: SeriesType = SeriesType.BARS,
    ) -> None:
        self._engine = engine
        self._store = store
        self._type = series_type

    @property
    def series_type(self) -> SeriesType:
        return self._type

    def series_option(self) -> dict:
        return build_series_option(self._type, self._store.all())

    def set_type(self, series_type: SeriesType) -> bool:
        """Switch representation. Returns False when it was already active."""
        series_type = SeriesType(series_type)
        if series_type is self._type:
            return False
        self._type = series_type
        self._engine.set_options({"series": [self.series_option()]})
        logger.debug("Series type switched to %s", series_type.value)
        return True
