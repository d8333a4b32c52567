"""
Time abstraction shared by the rate limiter and the throughput reporter.
"""
import time
from typing import Protocol


class Clock(Protocol):
    """Time source returning seconds since the epoch."""
    def now(self) -> float: ...


class WallClock(Clock):
    """Production clock using time.time.

    Rate windows are aligned to wall-clock seconds, so a monotonic clock
    is not a drop-in replacement here.
    """
    def now(self) -> float:
        return time.time()
