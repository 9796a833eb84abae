"""Summary cards: a title plus one price, coloured by price band."""

from __future__ import annotations

import math

from .formatting import format_card_price, parse_price
from .interface import SummaryCard, TokenSource
from .theme import price_color, resolve_tokens

CURRENT_HOUR = "Current Hour"
SELECTED_RANGE = "Selected Range"
LAST_24_HOURS = "Last 24 Hours"


class PriceCard(SummaryCard):
    """In-memory summary card.

    ``background`` is None when no colour override applies (NaN price), in
    which case the front end shows its neutral card colour.
    """

    def __init__(self, title: str, tokens: TokenSource) -> None:
        self._title = title
        self._tokens = tokens
        self._price = math.nan
        self._background: str | None = None

    @property
    def title(self) -> str:
        return self._title

    @property
    def price(self) -> float:
        return self._price

    @property
    def text(self) -> str:
        return format_card_price(self._price)

    @property
    def background(self) -> str | None:
        return self._background

    def set_title(self, text: str) -> None:
        self._title = text

    def set_price(self, value: float | str) -> None:
        self._price = parse_price(value)
        self.refresh_theme_background()

    def refresh_theme_background(self) -> None:
        """Recolour the background from the current theme tokens."""
        self._background = price_color(self._price, resolve_tokens(self._tokens))

    def to_dict(self) -> dict:
        return {
            "title": self._title,
            "price": self._price if math.isfinite(self._price) else None,
            "text": self.text,
            "background": self._background,
        }
