"""Factory for creating price feeds."""

from __future__ import annotations

import logging
import os

from .interface import PriceFeed

logger = logging.getLogger(__name__)


def create_price_feed() -> PriceFeed:
    """Create the appropriate price feed based on environment variables.

    - PRICE_FEED_SOURCE=simulator → SimulatedPriceFeed (random walk)
    - Otherwise → ComEdPriceFeed, against COMED_API_URL when set

    Returns a ready feed. Caller must ``await feed.close()`` on shutdown.
    """
    source = os.environ.get("PRICE_FEED_SOURCE", "").strip().lower()

    if source == "simulator":
        from .simulator import SimulatedPriceFeed

        logger.info("Price feed: simulator")
        return SimulatedPriceFeed()
    else:
        from .comed_client import COMED_API_URL, ComEdPriceFeed

        base_url = os.environ.get("COMED_API_URL", "").strip() or COMED_API_URL
        logger.info("Price feed: ComEd API at %s", base_url)
        return ComEdPriceFeed(base_url=base_url)
