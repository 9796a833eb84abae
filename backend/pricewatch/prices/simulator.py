"""Simulated 5-minute price feed for offline development."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable

import numpy as np

from .interface import PriceFeed

logger = logging.getLogger(__name__)

SAMPLE_INTERVAL_MS = 5 * 60 * 1000
HISTORY_MS = 24 * 60 * 60 * 1000
HOUR_MS = 60 * 60 * 1000

# Daily price shape in cents/kWh: cheap overnight, peaking late afternoon
BASE_PRICE = 4.0
DAILY_AMPLITUDE = 3.5
PEAK_HOUR = 17.0

# Mean reversion strength and volatility per 5-minute step
REVERSION = 0.15
VOLATILITY = 0.6

# Occasional demand spikes
SPIKE_PROBABILITY = 0.01
SPIKE_RANGE = (6.0, 20.0)


def _now_ms() -> int:
    return int(time.time() * 1000)


class PriceWalkSimulator:
    """Mean-reverting random walk around a daily price curve.

    Math:
        x(t+1) = x(t) + k * (m(t) - x(t)) + s * Z

    Where:
        m(t) = BASE + A * cos(2*pi * (hour(t) - PEAK_HOUR) / 24)
        k    = reversion strength per step
        s    = per-step volatility
        Z    = standard normal draw

    A spike adds a one-step jump drawn from SPIKE_RANGE.
    """

    def __init__(self, seed: int | None = None, spike_probability: float = SPIKE_PROBABILITY) -> None:
        self._rng = np.random.default_rng(seed)
        self._spike_prob = spike_probability
        self._price: float | None = None

    @staticmethod
    def mean_price(timestamp_ms: int) -> float:
        hour = (timestamp_ms % (24 * HOUR_MS)) / HOUR_MS
        return BASE_PRICE + DAILY_AMPLITUDE * math.cos(2 * math.pi * (hour - PEAK_HOUR) / 24)

    def step(self, timestamp_ms: int) -> float:
        """Advance one 5-minute step and return the price at ``timestamp_ms``."""
        target = self.mean_price(timestamp_ms)
        if self._price is None:
            self._price = target
        self._price += REVERSION * (target - self._price) + VOLATILITY * float(self._rng.standard_normal())

        price = self._price
        if self._rng.random() < self._spike_prob:
            spike = float(self._rng.uniform(*SPIKE_RANGE))
            logger.debug("Simulated price spike at %d: +%.1f", timestamp_ms, spike)
            price += spike
        return round(price, 1)


class SimulatedPriceFeed(PriceFeed):
    """PriceFeed producing ComEd-shaped payloads from a PriceWalkSimulator.

    The first fetch backfills 24 hours; later fetches extend the history up to
    the current time and drop samples older than 24 hours.
    """

    def __init__(
        self,
        seed: int | None = None,
        now_ms: Callable[[], int] = _now_ms,
        spike_probability: float = SPIKE_PROBABILITY,
    ) -> None:
        self._sim = PriceWalkSimulator(seed=seed, spike_probability=spike_probability)
        self._now_ms = now_ms
        self._samples: list[tuple[int, float]] = []

    async def fetch_five_minute_feed(self) -> list[dict]:
        self._advance()
        return [{"millisUTC": str(ts), "price": f"{price:.1f}"} for ts, price in self._samples]

    async def fetch_current_hour_average(self) -> list[dict]:
        self._advance()
        now = self._now_ms()
        hour_start = now - now % HOUR_MS
        in_hour = [price for ts, price in self._samples if ts >= hour_start]
        if not in_hour:
            return []
        return [{"millisUTC": str(now), "price": round(sum(in_hour) / len(in_hour), 1)}]

    async def close(self) -> None:
        self._samples = []

    def _advance(self) -> None:
        now = self._now_ms()
        latest = now - now % SAMPLE_INTERVAL_MS
        if self._samples:
            ts = self._samples[-1][0] + SAMPLE_INTERVAL_MS
        else:
            ts = latest - HISTORY_MS + SAMPLE_INTERVAL_MS
        while ts <= latest:
            self._samples.append((ts, self._sim.step(ts)))
            ts += SAMPLE_INTERVAL_MS

        cutoff = now - HISTORY_MS
        self._samples = [(t, p) for t, p in self._samples if t > cutoff]
