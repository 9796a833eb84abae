"""Exceptions raised by the price dashboard engine."""


class PriceWatchError(Exception):
    """Base class for all PriceWatch errors."""


class FeedError(PriceWatchError):
    """A price feed could not be retrieved (transport or HTTP status failure)."""
