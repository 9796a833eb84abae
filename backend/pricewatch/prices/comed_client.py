"""ComEd hourly-pricing API client for real 5-minute prices."""

from __future__ import annotations

import logging

import httpx

from .errors import FeedError
from .interface import PriceFeed

logger = logging.getLogger(__name__)

COMED_API_URL = "https://hourlypricing.comed.com/api"
REQUEST_TIMEOUT = 30.0


class ComEdPriceFeed(PriceFeed):
    """PriceFeed backed by the ComEd hourly-pricing REST API.

    GET {base}?type=5minutefeed         -> [{"millisUTC": "...", "price": "..."}, ...]
    GET {base}?type=currenthouraverage  -> [{"millisUTC": "...", "price": "..."}]

    The API needs no key. Values arrive as strings; parsing into numbers is
    left to the caller so malformed entries degrade per entry.
    """

    def __init__(
        self,
        base_url: str = COMED_API_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_five_minute_feed(self) -> list[dict]:
        return await self._get_list("5minutefeed")

    async def fetch_current_hour_average(self) -> list[dict]:
        return await self._get_list("currenthouraverage")

    async def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            logger.info("ComEd HTTP client closed")

    # --- Internal ---

    async def _get_list(self, feed_type: str) -> list[dict]:
        try:
            response = await self._client.get(self._base_url, params={"type": feed_type})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FeedError(f"ComEd {feed_type} returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise FeedError(f"ComEd {feed_type} request failed: {e}") from e

        if not isinstance(payload, list):
            logger.warning("ComEd %s: expected a list, got %s", feed_type, type(payload).__name__)
            return []
        entries = [entry for entry in payload if isinstance(entry, dict)]
        logger.debug("ComEd %s: %d entries", feed_type, len(entries))
        return entries
