"""Periodic and catch-up refresh cadence."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60.0
DEFAULT_IDLE_THRESHOLD = 60.0


class RefreshScheduler:
    """Triggers a refresh on start, every ``interval`` seconds, and on wake-up.

    When the UI becomes visible again after more than ``idle_threshold``
    seconds since the last recorded activity, an out-of-cycle refresh runs.
    ``clock`` must be monotonic; it is injectable for tests.

    Lifecycle:
        scheduler = RefreshScheduler(dashboard.refresh)
        await scheduler.start()
        # ... app runs ...
        await scheduler.on_visibility_changed(True)
        # ... app shutting down ...
        await scheduler.stop()
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[object]],
        interval: float = DEFAULT_INTERVAL,
        idle_threshold: float = DEFAULT_IDLE_THRESHOLD,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._refresh = refresh
        self._interval = interval
        self._idle_threshold = idle_threshold
        self._clock = clock
        self._last_activity = clock()
        self._task: asyncio.Task | None = None

    @property
    def last_activity(self) -> float:
        return self._last_activity

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        # Initial load before the periodic loop, so there is data right away
        await self._run_refresh()
        self._task = asyncio.create_task(self._loop(), name="price-refresh")
        logger.info("Refresh scheduler started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Refresh scheduler stopped")

    async def on_visibility_changed(self, visible: bool) -> bool:
        """Record a visibility transition. Returns True if a catch-up refresh ran."""
        now = self._clock()
        if not visible:
            self._last_activity = now
            return False

        idle = now - self._last_activity
        self._last_activity = now
        if idle <= self._idle_threshold:
            return False
        logger.info("Reactivated after %.0fs idle, refreshing data", idle)
        await self._run_refresh()
        return True

    # --- Internal ---

    async def _loop(self) -> None:
        """Refresh on interval. First refresh already happened in start()."""
        while True:
            await asyncio.sleep(self._interval)
            await self._run_refresh()

    async def _run_refresh(self) -> None:
        try:
            await self._refresh()
        except Exception:
            # Don't re-raise: the loop retries on the next interval
            logger.exception("Price refresh failed")
