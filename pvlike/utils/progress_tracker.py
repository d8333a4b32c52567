"""
Throughput reporting for the line relay.

The tracker owns no data of its own: it updates the relay's TransferState
and fans immutable ThroughputReport snapshots out to observers. The
terminal observer redraws a single carriage-return-prefixed line on the
diagnostic stream so successive reports overwrite instead of scrolling.
"""
import abc
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, List, Optional, TextIO

from .clock import Clock, WallClock

if TYPE_CHECKING:
    from ..core.state import TransferState

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Immutable report
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ThroughputReport:
    """Immutable snapshot of transfer statistics - prevents observer interference."""
    total_bytes: int
    elapsed_seconds: int
    rate_per_second: float

    @property
    def kilobytes_per_second(self) -> float:
        return self.rate_per_second / 1024


def render_report(report: ThroughputReport) -> str:
    return f"\r{report.total_bytes} bytes ({report.kilobytes_per_second:6.1f} KB/s)"

# ─────────────────────────────────────────────────────────────────────────────
# Observers
# ─────────────────────────────────────────────────────────────────────────────
class ProgressObserver(abc.ABC):
    """Observer interface for throughput notifications."""
    @abc.abstractmethod
    def on_update(self, report: ThroughputReport): ...

    @abc.abstractmethod
    def on_finish(self, report: ThroughputReport): ...


class TerminalObserver(ProgressObserver):
    """Redraws the progress line in place on a text stream (normally stderr)."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self.line_open = False

    def on_update(self, report: ThroughputReport):
        self._stream.write(render_report(report))
        self._stream.flush()
        self.line_open = True

    def on_finish(self, report: ThroughputReport):
        self._stream.write("\n")
        self._stream.flush()
        self.line_open = False

    def break_line(self):
        """Move off the progress line so another message does not overwrite it."""
        if self.line_open:
            self._stream.write("\n")
            self._stream.flush()
            self.line_open = False


class LoggingObserver(ProgressObserver):
    """Observer that logs throughput, throttled on the supplied clock."""

    def __init__(self, logger: logging.Logger, clock: Clock, log_interval_seconds: int = 10):
        self.logger = logger
        self._clock = clock
        self._log_interval = log_interval_seconds
        self._last_log_time = -float('inf')

    def on_update(self, report: ThroughputReport):
        now = self._clock.now()
        if now - self._last_log_time > self._log_interval:
            self.logger.debug(f"{report.total_bytes} bytes relayed, "
                              f"{report.kilobytes_per_second:.1f} KB/s")
            self._last_log_time = now

    def on_finish(self, report: ThroughputReport):
        self.logger.info(
            f"📊 Relay complete: {report.total_bytes} bytes in "
            f"{timedelta(seconds=report.elapsed_seconds)} "
            f"({report.kilobytes_per_second:.1f} KB/s average)"
        )

# ─────────────────────────────────────────────────────────────────────────────
# Pure logic
# ─────────────────────────────────────────────────────────────────────────────
class ReportGenerator:
    """Calculates throughput reports from state - pure function, no side effects."""

    def __init__(self, clock: Clock):
        self._clock = clock

    def generate(self, state: "TransferState") -> ThroughputReport:
        # Whole seconds, so reports inside the first second show a rate of 0
        elapsed = 0
        if state.start_time is not None:
            elapsed = max(0, int(self._clock.now()) - int(state.start_time))

        rate = state.total_bytes / elapsed if elapsed > 0 else 0.0
        return ThroughputReport(
            total_bytes=state.total_bytes,
            elapsed_seconds=elapsed,
            rate_per_second=rate
        )

# ─────────────────────────────────────────────────────────────────────────────
# Tracker
# ─────────────────────────────────────────────────────────────────────────────
class ThroughputTracker:
    """Accumulates byte counts on a TransferState and notifies observers."""

    def __init__(
        self,
        state: "TransferState",
        observers: Optional[List[ProgressObserver]] = None,
        clock: Clock = WallClock()
    ):
        self._state = state
        self._observers = observers or []
        self._clock = clock
        self._report_generator = ReportGenerator(self._clock)

    def start(self):
        """Capture the start time. Later calls keep the first value."""
        if self._state.start_time is None:
            self._state.start_time = self._clock.now()
            logger.debug("Transfer clock started")

    def update(self, nbytes: int):
        """Add ``nbytes`` to the running total and notify observers."""
        self._state.total_bytes += nbytes
        self._notify_observers()

    def finish(self):
        report = self._report_generator.generate(self._state)
        for observer in self._observers:
            observer.on_finish(report)

    def break_line(self):
        for observer in self._observers:
            if isinstance(observer, TerminalObserver):
                observer.break_line()

    def _notify_observers(self):
        if not self._observers:
            return

        report = self._report_generator.generate(self._state)
        for observer in self._observers:
            observer.on_update(report)

    def get_current_report(self) -> ThroughputReport:
        """Get current snapshot without notifications."""
        return self._report_generator.generate(self._state)
