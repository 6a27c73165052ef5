# reel_engine/infrastructure/animation/clock.py
import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current time in milliseconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """
    Clock that only moves when told to.
    Used for headless runs and tests.
    """
    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError(f"Cannot move clock backwards by {ms} ms")
        self._now += ms
        return self._now
