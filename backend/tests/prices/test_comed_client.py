"""Tests for ComEdPriceFeed (mocked transport)."""

import httpx
import pytest

from pricewatch.prices.comed_client import COMED_API_URL, ComEdPriceFeed
from pricewatch.prices.errors import FeedError

FIVE_MINUTE = [
    {"millisUTC": "1760745600000", "price": "3.4"},
    {"millisUTC": "1760745300000", "price": "3.1"},
]
CURRENT_HOUR = [{"millisUTC": "1760745600000", "price": "3.3"}]


def _feed(handler) -> ComEdPriceFeed:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ComEdPriceFeed(base_url="https://example.test/api", client=client)


def _routes(request: httpx.Request) -> httpx.Response:
    feed_type = request.url.params.get("type")
    if feed_type == "5minutefeed":
        return httpx.Response(200, json=FIVE_MINUTE)
    if feed_type == "currenthouraverage":
        return httpx.Response(200, json=CURRENT_HOUR)
    return httpx.Response(404)


@pytest.mark.asyncio
class TestComEdPriceFeed:
    """Unit tests for ComEdPriceFeed with a mocked transport."""

    async def test_five_minute_feed(self):
        """Test fetching the 5-minute feed."""
        feed = _feed(_routes)
        assert await feed.fetch_five_minute_feed() == FIVE_MINUTE

    async def test_current_hour_average(self):
        """Test fetching the current-hour average."""
        feed = _feed(_routes)
        assert await feed.fetch_current_hour_average() == CURRENT_HOUR

    async def test_request_shape(self):
        """Test that the feed type goes in the query string."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        feed = _feed(handler)
        await feed.fetch_five_minute_feed()

        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api"
        assert seen[0].url.params["type"] == "5minutefeed"

    async def test_http_error_raises_feed_error(self):
        """Test that a non-2xx status becomes FeedError."""
        feed = _feed(lambda request: httpx.Response(503))
        with pytest.raises(FeedError, match="503"):
            await feed.fetch_five_minute_feed()

    async def test_network_error_raises_feed_error(self):
        """Test that transport failures become FeedError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        feed = _feed(handler)
        with pytest.raises(FeedError):
            await feed.fetch_current_hour_average()

    async def test_invalid_json_raises_feed_error(self):
        """Test that an unparseable body becomes FeedError."""
        feed = _feed(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(FeedError):
            await feed.fetch_five_minute_feed()

    async def test_non_list_payload_is_empty(self):
        """Test that an unexpected payload shape degrades to no entries."""
        feed = _feed(lambda request: httpx.Response(200, json={"error": "nope"}))
        assert await feed.fetch_five_minute_feed() == []

    async def test_non_dict_entries_dropped(self):
        """Test that entries which are not objects are skipped."""
        feed = _feed(lambda request: httpx.Response(200, json=[{"price": "1"}, "junk", 3]))
        assert await feed.fetch_five_minute_feed() == [{"price": "1"}]

    async def test_close_leaves_injected_client_open(self):
        """Test that an injected client is not closed by the feed."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(_routes))
        feed = ComEdPriceFeed(client=client)
        await feed.close()
        assert not client.is_closed
        await client.aclose()

    async def test_close_owned_client(self):
        """Test that an owned client is closed, and close is idempotent."""
        feed = ComEdPriceFeed()
        await feed.close()
        await feed.close()  # Should not raise
        assert feed._client.is_closed


class TestComEdPriceFeedConfig:
    """Tests for client construction."""

    def test_trailing_slash_stripped(self):
        """Test that the base URL is normalized."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(_routes))
        feed = ComEdPriceFeed(base_url=COMED_API_URL + "/", client=client)
        assert feed.base_url == COMED_API_URL
