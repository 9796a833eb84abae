"""In-memory chart engine: keeps the declarative state a browser chart would hold."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from .interface import ChartEngine

logger = logging.getLogger(__name__)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; lists and scalars are replaced.
    """
    out = copy.deepcopy(base or {})
    for k, v in (override or {}).items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def to_jsonable(value: Any) -> Any:
    """Strip formatter callables so the options can be serialized."""
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items() if not callable(v)}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value if not callable(v)]
    if isinstance(value, float) and value != value:  # NaN
        return None
    return value


class InMemoryChartEngine(ChartEngine):
    """ChartEngine that holds options and zoom in memory.

    The visible extent is the zoom window mapped onto the time extent of the
    first series' data, the way a percentage-based data zoom behaves. Merged
    option updates keep the zoom; a non-merging replacement resets it to the
    full range.
    """

    def __init__(self) -> None:
        self._options: dict[str, Any] = {}
        self._start_percent = 0.0
        self._end_percent = 100.0
        self._listeners: list[Callable[[], None]] = []
        self._resize_count = 0

    # --- ChartEngine ---

    def set_options(self, options: dict, non_merging: bool = False) -> None:
        if non_merging:
            self._options = copy.deepcopy(options)
            self._start_percent, self._end_percent = 0.0, 100.0
        else:
            self._options = deep_merge(self._options, options)

    def dispatch_zoom(self, start_percent: float, end_percent: float) -> None:
        start = min(max(float(start_percent), 0.0), 100.0)
        end = min(max(float(end_percent), 0.0), 100.0)
        if start > end:
            start, end = end, start
        self._start_percent, self._end_percent = start, end
        self._notify()

    def get_visible_axis_extent(self) -> tuple[float, float] | None:
        extent = self.data_extent()
        if extent is None:
            return None
        lo, hi = extent
        span = hi - lo
        return (
            lo + span * self._start_percent / 100.0,
            lo + span * self._end_percent / 100.0,
        )

    def on_visible_range_changed(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def resize(self) -> None:
        self._resize_count += 1

    # --- Inspection ---

    @property
    def options(self) -> dict[str, Any]:
        return self._options

    @property
    def zoom_window(self) -> tuple[float, float]:
        return self._start_percent, self._end_percent

    @property
    def resize_count(self) -> int:
        return self._resize_count

    def data_extent(self) -> tuple[float, float] | None:
        """``(min, max)`` timestamp of the first series, or None without data."""
        series = self._options.get("series") or []
        if not series:
            return None
        data = series[0].get("data") or []
        timestamps = [pair[0] for pair in data]
        if not timestamps:
            return None
        return float(min(timestamps)), float(max(timestamps))

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the current state."""
        return {
            "options": to_jsonable(self._options),
            "zoom": {"start": self._start_percent, "end": self._end_percent},
            "visible_extent": self.get_visible_axis_extent(),
        }

    # --- Internal ---

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Visible-range listener failed")
