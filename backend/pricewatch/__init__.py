"""PriceWatch: rolling 24-hour ComEd 5-minute price dashboard."""
