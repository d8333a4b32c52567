"""
The rate-limited line relay.

For each source in order: open it, pull lines one at a time, ask the rate
limiter how long to wait, sleep, write the line unchanged, flush, then
count the bytes and refresh the throughput observers. Statistics are
cumulative across every source of the run.
"""
import logging
import time
from typing import BinaryIO, Callable, Iterable, List, Optional, TextIO

from ..config import RunConfig
from ..utils.clock import Clock, WallClock
from ..utils.progress_tracker import ProgressObserver, ThroughputTracker
from ..utils.rate_limiter import RateLimiterFactory
from .sources import InputSource, SourceError, SourceOpenError, SourceReadError, iter_lines
from .state import TransferState

logger = logging.getLogger(__name__)


class LineRelay:
    """Single-threaded relay from input sources to one binary output."""

    def __init__(
        self,
        config: RunConfig,
        output: BinaryIO,
        diagnostics: TextIO,
        observers: Optional[List[ProgressObserver]] = None,
        clock: Optional[Clock] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.config = config
        self.state = TransferState()
        self.failed_sources: List[str] = []

        self._output = output
        self._diagnostics = diagnostics
        self._clock = clock or WallClock()
        self._sleep = sleep
        self._limiter = RateLimiterFactory.from_config(config, self._clock)
        self._tracker = ThroughputTracker(self.state, observers, self._clock)

    def run(self, sources: Iterable[InputSource]) -> TransferState:
        """Relay every source in order and return the final transfer state."""
        for source in sources:
            self._relay_source(source)

        self._tracker.finish()

        if self.failed_sources:
            logger.info(f"{len(self.failed_sources)} source(s) failed: {', '.join(self.failed_sources)}")
        return self.state

    def _relay_source(self, source: InputSource) -> None:
        try:
            handle = source.open()
        except SourceOpenError as e:
            self._report(e)
            return

        with handle as stream:
            self._tracker.start()
            logger.debug(f"Relaying {source.name}")
            try:
                for line in iter_lines(stream, source.name):
                    self._relay_line(line)
            except SourceReadError as e:
                self._report(e)

    def _relay_line(self, line: bytes) -> None:
        length = len(line)

        delay = self._limiter.admit(self.state, length)
        if delay > 0:
            self._sleep(delay)

        self._output.write(line)
        self._output.flush()

        self._tracker.update(length)

    def _report(self, error: SourceError) -> None:
        self.failed_sources.append(error.name)
        self._tracker.break_line()
        self._diagnostics.write(f"{error}\n")
        self._diagnostics.flush()
        logger.debug(f"Skipped {error.name}: {error.error!r}")
