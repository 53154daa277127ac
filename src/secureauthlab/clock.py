"""
SecureAuth Lab Clocks
The "advance the clock by D, then proceed" primitive behind simulated pacing.

MonotonicClock really waits; VirtualClock only advances simulated time so
runs are instant and deterministic under test.
"""

import asyncio
import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Time source and suspension point for a simulation run."""

    @abstractmethod
    def now_ms(self) -> float:
        """Current time in milliseconds (only differences are meaningful)."""
        pass

    @abstractmethod
    async def sleep(self, ms: float) -> None:
        """Suspend the run for ms milliseconds."""
        pass

    def fork(self) -> "Clock":
        """Time base for a single run. Shared clocks return themselves."""
        return self


class MonotonicClock(Clock):
    """Wall-clock pacing backed by asyncio.sleep."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000

    async def sleep(self, ms: float) -> None:
        await asyncio.sleep(max(ms, 0) / 1000)


class VirtualClock(Clock):
    """
    Simulated time that advances instantly.

    Each sleep still yields to the event loop once, so a cancelled run stops
    at its next suspension point. Requested delays are kept in ``sleeps``.
    Each run works on its own fork, so parallel runs keep separate time.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self.sleeps: list[float] = []

    def now_ms(self) -> float:
        return self._now

    async def sleep(self, ms: float) -> None:
        ms = max(ms, 0)
        self.sleeps.append(ms)
        self._now += ms
        await asyncio.sleep(0)

    def fork(self) -> "VirtualClock":
        """
        Independent simulated time starting at this clock's current time.

        Forks append to the same ``sleeps`` log but never move each other's time.
        """
        child = VirtualClock(self._now)
        child.sleeps = self.sleeps
        return child
