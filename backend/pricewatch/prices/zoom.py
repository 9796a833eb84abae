"""Maps a requested window width in hours onto the chart's zoom range."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Sequence

from .interface import ChartEngine
from .models import PricePoint, ZoomState

logger = logging.getLogger(__name__)

WINDOW_HOURS = 24.0
DEFAULT_INITIAL_HOURS = 3.0


class ZoomController:
    """Owns the ZoomState and issues zoom commands to the chart engine.

    The window is derived from calendar width (hours out of 24), not from the
    number of samples, so it is independent of sample density.
    """

    def __init__(self, engine: ChartEngine, initial_hours: float = DEFAULT_INITIAL_HOURS) -> None:
        self._engine = engine
        self._initial_hours = initial_hours
        self._state = ZoomState()
        self._initial_applied = False

    @property
    def state(self) -> ZoomState:
        return self._state

    @property
    def requested_hours(self) -> float | None:
        return self._state.requested_hours

    def set_window(self, hours: object) -> bool:
        """Show the trailing ``hours`` of the series. Returns True if accepted.

        Anything that is not a number in ``(0, 24]`` is ignored.
        """
        if isinstance(hours, bool) or not isinstance(hours, numbers.Real):
            logger.debug("Ignoring non-numeric zoom window %r", hours)
            return False
        hours = float(hours)
        if not 0 < hours <= WINDOW_HOURS:
            logger.debug("Ignoring out-of-range zoom window %r", hours)
            return False

        start_percent = max(0.0, 100.0 - (hours / WINDOW_HOURS) * 100.0)
        self._state = ZoomState(start_percent=start_percent, end_percent=100.0, requested_hours=hours)
        self._engine.dispatch_zoom(start_percent, 100.0)
        return True

    def reapply(self) -> None:
        """Re-issue the last requested window, e.g. after a non-merging re-render."""
        if self._state.requested_hours is not None:
            self.set_window(self._state.requested_hours)

    def on_series_replaced(self, points: Sequence[PricePoint]) -> None:
        """Apply the default window once, on the first non-empty load."""
        if self._initial_applied or not points:
            return
        self._initial_applied = True
        logger.info("First data load: defaulting zoom to %.0f hours", self._initial_hours)
        self.set_window(self._initial_hours)
