"""FastAPI application for the price dashboard.

Run:  uvicorn pricewatch.main:app --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from zoneinfo import ZoneInfo

from fastapi import FastAPI

from .prices import PriceDashboard, RefreshScheduler, create_api_router, create_price_feed
from .prices.formatting import DEFAULT_TIMEZONE
from .prices.scheduler import DEFAULT_INTERVAL

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the app from environment configuration.

    PRICE_TIMEZONE            display timezone (default America/Chicago)
    REFRESH_INTERVAL_SECONDS  refresh cadence (default 60)
    LOG_LEVEL                 logging level (default INFO)
    """
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    tz_name = os.environ.get("PRICE_TIMEZONE", "").strip()
    tz = ZoneInfo(tz_name) if tz_name else DEFAULT_TIMEZONE
    interval = float(os.environ.get("REFRESH_INTERVAL_SECONDS", DEFAULT_INTERVAL))

    dashboard = PriceDashboard(create_price_feed(), tz=tz)
    scheduler = RefreshScheduler(dashboard.refresh, interval=interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await scheduler.start()
        yield
        await scheduler.stop()
        await dashboard.close()

    app = FastAPI(title="PriceWatch", version="0.1.0", lifespan=lifespan)
    app.include_router(create_api_router(dashboard, scheduler))
    app.state.dashboard = dashboard
    app.state.scheduler = scheduler
    return app


app = create_app()
