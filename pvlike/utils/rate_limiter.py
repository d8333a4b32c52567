"""
Per-second rate limiting for the line relay.

A fixed one-second window counts the bytes admitted since the wall-clock
second last changed. Once the window total passes the ceiling, the caller
is told to sleep for ``overage / ceiling`` seconds before emitting. Lines
are never split or rejected: an oversized line is admitted after a single
proportional sleep.

The window lives on the caller's TransferState rather than in the limiter,
so ``admit`` is a plain ``(state, length) -> delay`` transformation.
"""
import logging
from typing import TYPE_CHECKING, Any, Dict, Protocol

from ..config import RunConfig
from .clock import Clock, WallClock

if TYPE_CHECKING:
    from ..core.state import TransferState

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Core Abstraction
# ─────────────────────────────────────────────────────────────────────────────
class RateLimiter(Protocol):
    """Strategy interface for the relay's rate limiting."""

    def admit(self, state: "TransferState", line_length: int) -> float:
        """Record ``line_length`` bytes and return the delay in seconds to apply first."""
        ...

    def get_status(self, state: "TransferState") -> Dict[str, Any]:
        """Return current limiter status for monitoring."""
        ...

    @property
    def name(self) -> str:
        ...

# ─────────────────────────────────────────────────────────────────────────────
# Strategy Implementations
# ─────────────────────────────────────────────────────────────────────────────
class PerSecondWindowLimiter(RateLimiter):
    """
    Fixed window counter aligned to wall-clock seconds.
    Resets the window whenever the current second differs from the last one seen.
    """

    def __init__(self, bytes_per_second: int, clock: Clock, name: str = "bytes_per_second"):
        if bytes_per_second <= 0:
            raise ValueError(f"Ceiling must be positive, got {bytes_per_second}")
        self._name = name
        self._ceiling = bytes_per_second
        self._clock = clock

    @property
    def name(self) -> str:
        return self._name

    @property
    def ceiling(self) -> int:
        return self._ceiling

    def admit(self, state: "TransferState", line_length: int) -> float:
        self._reset_if_needed(state)
        state.bytes_in_current_window += line_length

        if state.bytes_in_current_window <= self._ceiling:
            return 0.0

        overage = state.bytes_in_current_window - self._ceiling
        delay = overage / self._ceiling
        logger.debug(f"{self.name}: {state.bytes_in_current_window}/{self._ceiling} bytes "
                     f"this second, delaying {delay:.3f}s")
        return delay

    def _reset_if_needed(self, state: "TransferState") -> None:
        second = int(self._clock.now())
        if second != state.current_window_start:
            state.current_window_start = second
            state.bytes_in_current_window = 0

    def get_status(self, state: "TransferState") -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': 'PerSecondWindow',
            'ceiling_bytes_per_sec': self._ceiling,
            'bytes_in_window': state.bytes_in_current_window,
            'window_start': state.current_window_start,
            'utilization_pct': round((state.bytes_in_current_window / self._ceiling) * 100, 1)
        }


class NoOpRateLimiter(RateLimiter):
    """Unlimited transfer: never delays and never touches the window fields."""

    def __init__(self, name: str = "unlimited"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def admit(self, state: "TransferState", line_length: int) -> float:
        return 0.0

    def get_status(self, state: "TransferState") -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': 'NoOpRateLimiter',
            'status': 'unlimited'
        }

# ─────────────────────────────────────────────────────────────────────────────
# Factory
# ─────────────────────────────────────────────────────────────────────────────
class RateLimiterFactory:
    """Factory for creating the configured rate limiter."""

    @staticmethod
    def from_config(config: RunConfig, clock: Clock = WallClock()) -> RateLimiter:
        if config.unlimited:
            return NoOpRateLimiter()

        logger.info(f"🚦 Limiting transfer to {config.rate_limit_bytes_per_sec} bytes/s")
        return PerSecondWindowLimiter(config.rate_limit_bytes_per_sec, clock)
