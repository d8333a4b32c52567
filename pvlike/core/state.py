"""
Mutable transfer state shared by the relay, the rate limiter and the reporter.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class TransferState:
    """Internal mutable state container - pure data, no logic.

    Owned by a single LineRelay for the lifetime of a run.
    """
    total_bytes: int = 0
    start_time: Optional[float] = None
    current_window_start: Optional[int] = None
    bytes_in_current_window: int = 0
