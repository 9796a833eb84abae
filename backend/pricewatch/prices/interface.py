"""Abstract interfaces for the collaborators the dashboard engine talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class ChartEngine(ABC):
    """Contract for the chart-rendering capability.

    The engine accepts declarative draw options, can be told to show a zoom
    window, and reports the time extent currently visible on its x axis.
    It is the only place where option dictionaries are merged.
    """

    @abstractmethod
    def set_options(self, options: dict, non_merging: bool = False) -> None:
        """Apply draw options.

        With ``non_merging=True`` all prior declarative state (zoom included)
        is discarded and replaced; otherwise ``options`` is merged on top.
        """

    @abstractmethod
    def dispatch_zoom(self, start_percent: float, end_percent: float) -> None:
        """Show the window ``[start_percent, end_percent]`` of the data extent."""

    @abstractmethod
    def get_visible_axis_extent(self) -> tuple[float, float] | None:
        """Return ``(min_time, max_time)`` in epoch ms, or None if unavailable."""

    @abstractmethod
    def on_visible_range_changed(self, callback: Callable[[], None]) -> None:
        """Register a callback fired whenever the visible window changes."""

    @abstractmethod
    def resize(self) -> None:
        """Re-layout after the container size changed."""


class SummaryCard(ABC):
    """A small card showing a title and a price."""

    @abstractmethod
    def set_title(self, text: str) -> None:
        """Replace the card title."""

    @abstractmethod
    def set_price(self, value: float | str) -> None:
        """Show a price. NaN (or anything unparseable) renders as unavailable."""


class TokenSource(ABC):
    """Lookup of named design tokens (e.g. ``--chart-text-color``)."""

    @abstractmethod
    def get(self, name: str) -> str:
        """Return the token value, or an empty string when it is not defined."""


class PriceFeed(ABC):
    """Contract for the raw price data provider.

    Lifecycle:
        feed = create_price_feed()
        samples = await feed.fetch_five_minute_feed()
        current = await feed.fetch_current_hour_average()
        # ... app shutting down ...
        await feed.close()
    """

    @abstractmethod
    async def fetch_five_minute_feed(self) -> list[dict]:
        """Return recent samples as ``[{"millisUTC": "...", "price": "..."}, ...]``.

        Raises FeedError when the feed cannot be retrieved.
        """

    @abstractmethod
    async def fetch_current_hour_average(self) -> list[dict]:
        """Return zero or one ``{"price": ...}`` entries for the current hour.

        Raises FeedError when the feed cannot be retrieved.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release resources. Safe to call multiple times."""
