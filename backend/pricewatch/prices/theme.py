"""Theme selection, design-token sources and the price-to-colour rule."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from . import palettes
from .interface import TokenSource
from .models import ThemeTokens

logger = logging.getLogger(__name__)


class ThemeSignal:
    """Light/dark selection: the system preference plus an optional manual override.

    The override, when set, always wins over the system preference.
    """

    def __init__(self, system_prefers_dark: bool = False, manual_override: bool | None = None) -> None:
        self.system_prefers_dark = system_prefers_dark
        self.manual_override = manual_override

    @property
    def is_dark(self) -> bool:
        if self.manual_override is not None:
            return self.manual_override
        return self.system_prefers_dark

    def set_system_preference(self, prefers_dark: bool) -> bool:
        """Record a new system preference. Returns True if the effective theme changed."""
        before = self.is_dark
        self.system_prefers_dark = bool(prefers_dark)
        return before != self.is_dark

    def toggle(self) -> bool:
        """Flip the effective theme regardless of the system preference."""
        self.manual_override = not self.is_dark
        return self.is_dark

    def clear_override(self) -> bool:
        """Follow the system preference again. Returns True if the effective theme changed."""
        before = self.is_dark
        self.manual_override = None
        return before != self.is_dark

    def to_dict(self) -> dict:
        return {
            "dark": self.is_dark,
            "system_prefers_dark": self.system_prefers_dark,
            "manual_override": self.manual_override,
        }


class StaticTokenSource(TokenSource):
    """Token source backed by a fixed mapping."""

    def __init__(self, tokens: Mapping[str, str] | None = None) -> None:
        self._tokens = dict(tokens or {})

    def get(self, name: str) -> str:
        return (self._tokens.get(name) or "").strip()


class ThemedTokenSource(TokenSource):
    """Token source that follows a ThemeSignal, switching between two palettes."""

    def __init__(
        self,
        signal: ThemeSignal,
        light: Mapping[str, str] = palettes.LIGHT_TOKENS,
        dark: Mapping[str, str] = palettes.DARK_TOKENS,
    ) -> None:
        self._signal = signal
        self._light = dict(light)
        self._dark = dict(dark)

    def get(self, name: str) -> str:
        table = self._dark if self._signal.is_dark else self._light
        return (table.get(name) or "").strip()


def resolve_tokens(source: TokenSource) -> ThemeTokens:
    """Read every token fresh from ``source``, falling back where it is empty."""

    def lookup(name: str) -> str:
        return source.get(name) or palettes.FALLBACK_TOKENS[name]

    low = lookup(palettes.PRICE_COLOR_LOW)
    return ThemeTokens(
        text_color=lookup(palettes.TEXT_COLOR),
        grid_line_color=lookup(palettes.GRID_LINE_COLOR),
        tooltip_background=lookup(palettes.TOOLTIP_BACKGROUND),
        tooltip_border=lookup(palettes.TOOLTIP_BORDER),
        price_color_low=low,
        price_color_medium=lookup(palettes.PRICE_COLOR_MEDIUM),
        price_color_high=lookup(palettes.PRICE_COLOR_HIGH),
        price_color_default=source.get(palettes.PRICE_COLOR_DEFAULT) or low,
    )


def price_color(price: float, tokens: ThemeTokens) -> str | None:
    """Colour for ``price``: low below 8, medium below 15, high from 15 up.

    Returns None for NaN or infinite prices, meaning "no colour override";
    callers fall back to their neutral default rather than the low colour.
    """
    if not math.isfinite(price):
        return None
    if price < palettes.PRICE_THRESHOLD_LOW:
        return tokens.price_color_low
    if price < palettes.PRICE_THRESHOLD_HIGH:
        return tokens.price_color_medium
    return tokens.price_color_high
