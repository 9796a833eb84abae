"""HTTP and SSE endpoints for the price dashboard."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from .dashboard import PriceDashboard
from .models import SeriesType, SizeContext
from .scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


class ZoomRequest(BaseModel):
    hours: float


class SeriesTypeRequest(BaseModel):
    series_type: SeriesType


class ThemeRequest(BaseModel):
    system_prefers_dark: bool | None = None
    toggle: bool = False


class VisibilityRequest(BaseModel):
    visible: bool


class SizeRequest(BaseModel):
    base_font_size: float = Field(gt=0)


def create_api_router(dashboard: PriceDashboard, scheduler: RefreshScheduler) -> APIRouter:
    """Create the dashboard router with references to the dashboard and scheduler.

    This factory pattern lets us inject both without globals.
    """
    router = APIRouter(prefix="/api", tags=["prices"])

    @router.get("/prices/state")
    async def get_state() -> dict:
        return dashboard.snapshot()

    @router.post("/prices/zoom")
    async def set_zoom(body: ZoomRequest) -> dict:
        accepted = dashboard.set_zoom(body.hours)
        return {"accepted": accepted, "state": dashboard.snapshot()}

    @router.post("/prices/type")
    async def set_series_type(body: SeriesTypeRequest) -> dict:
        changed = dashboard.set_series_type(body.series_type)
        return {"changed": changed, "state": dashboard.snapshot()}

    @router.post("/prices/theme")
    async def set_theme(body: ThemeRequest) -> dict:
        if body.system_prefers_dark is not None:
            dashboard.set_system_dark(body.system_prefers_dark)
        if body.toggle:
            dashboard.toggle_theme()
        return dashboard.snapshot()

    @router.post("/prices/size")
    async def set_size(body: SizeRequest) -> dict:
        dashboard.resize(SizeContext(base_font_size=body.base_font_size))
        return dashboard.snapshot()

    @router.post("/prices/visibility")
    async def set_visibility(body: VisibilityRequest) -> dict:
        refreshed = await scheduler.on_visibility_changed(body.visible)
        return {"refreshed": refreshed}

    @router.get("/stream/prices")
    async def stream_prices(request: Request) -> StreamingResponse:
        """SSE endpoint for dashboard updates.

        Emits the full dashboard snapshot whenever it changes:

            data: {"version": 3, "series_type": "bar", "cards": [...], ...}
        """
        return StreamingResponse(
            _generate_events(dashboard, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


async def _generate_events(
    dashboard: PriceDashboard,
    request: Request,
    interval: float = 1.0,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted dashboard snapshots.

    Checks for changes every `interval` seconds. Stops when the client
    disconnects.
    """
    yield "retry: 1000\n\n"

    last_payload: str | None = None
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            payload = json.dumps(dashboard.snapshot())
            if payload != last_payload:
                last_payload = payload
                yield f"data: {payload}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
