"""
Utility modules for the relay: clock, rate limiting, throughput reporting
"""
from .clock import Clock, WallClock
from .rate_limiter import (
    RateLimiter, PerSecondWindowLimiter, NoOpRateLimiter, RateLimiterFactory
)
from .progress_tracker import (
    ThroughputReport, ReportGenerator, ThroughputTracker,
    TerminalObserver, LoggingObserver, render_report
)

__all__ = [
    'Clock', 'WallClock',
    'RateLimiter', 'PerSecondWindowLimiter', 'NoOpRateLimiter', 'RateLimiterFactory',
    'ThroughputReport', 'ReportGenerator', 'ThroughputTracker',
    'TerminalObserver', 'LoggingObserver', 'render_report'
]
