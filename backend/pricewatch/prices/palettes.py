"""Design-token tables for the light and dark themes."""

# Token names, as used by the front-end stylesheet
TEXT_COLOR = "--chart-text-color"
GRID_LINE_COLOR = "--chart-grid-line-color"
TOOLTIP_BACKGROUND = "--chart-tooltip-background-color"
TOOLTIP_BORDER = "--chart-tooltip-border-color"
PRICE_COLOR_LOW = "--price-color-low"
PRICE_COLOR_MEDIUM = "--price-color-medium"
PRICE_COLOR_HIGH = "--price-color-high"
PRICE_COLOR_DEFAULT = "--price-color-default"

# Used when the token source returns an empty value.
# --price-color-default falls back to the resolved low colour first.
FALLBACK_TOKENS: dict[str, str] = {
    TEXT_COLOR: "#333333",
    GRID_LINE_COLOR: "#cccccc",
    TOOLTIP_BACKGROUND: "#ffffff",
    TOOLTIP_BORDER: "#cccccc",
    PRICE_COLOR_LOW: "#2f4b7c",
    PRICE_COLOR_MEDIUM: "#ff7c43",
    PRICE_COLOR_HIGH: "#d45087",
    PRICE_COLOR_DEFAULT: "#2f4b7c",
}

LIGHT_TOKENS: dict[str, str] = {
    TEXT_COLOR: "#333333",
    GRID_LINE_COLOR: "#e0e0e0",
    TOOLTIP_BACKGROUND: "#ffffff",
    TOOLTIP_BORDER: "#cccccc",
    PRICE_COLOR_LOW: "#2f4b7c",
    PRICE_COLOR_MEDIUM: "#ff7c43",
    PRICE_COLOR_HIGH: "#d45087",
    PRICE_COLOR_DEFAULT: "#2f4b7c",
}

DARK_TOKENS: dict[str, str] = {
    TEXT_COLOR: "#e6e6e6",
    GRID_LINE_COLOR: "#444444",
    TOOLTIP_BACKGROUND: "#1f1f1f",
    TOOLTIP_BORDER: "#555555",
    PRICE_COLOR_LOW: "#5b7fc0",  # Lifted so it reads on a dark background
    PRICE_COLOR_MEDIUM: "#ff9a66",
    PRICE_COLOR_HIGH: "#e574a4",
    PRICE_COLOR_DEFAULT: "#5b7fc0",
}

# Price thresholds in cents/kWh
PRICE_THRESHOLD_LOW = 8.0
PRICE_THRESHOLD_HIGH = 15.0
