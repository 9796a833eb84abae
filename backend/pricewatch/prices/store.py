"""In-memory store of the trailing 24-hour price series."""

from __future__ import annotations

from collections.abc import Iterable

from .models import PricePoint


class SeriesStore:
    """Holds the current ordered sequence of price samples.

    Writer: PriceDashboard, once per refresh cycle.
    Readers: RangeAggregator, SeriesTypeSwitch, the streaming endpoint.

    Everything runs on one event loop, so no lock is needed. The sequence is
    replaced wholesale; callers get an immutable tuple.
    """

    def __init__(self) -> None:
        self._points: tuple[PricePoint, ...] = ()
        self._version: int = 0  # Monotonically increasing; bumped on every replace

    def replace(self, points: Iterable[PricePoint]) -> None:
        """Discard the current sequence and store ``points`` in source order."""
        self._points = tuple(points)
        self._version += 1

    def all(self) -> tuple[PricePoint, ...]:
        """The current sequence. May be empty."""
        return self._points

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)
