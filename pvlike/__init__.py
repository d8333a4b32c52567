"""
pv-like - Line-by-line pipe viewer

Relays text lines from files or standard input to standard output,
optionally throttled to a bytes-per-second ceiling, with a live
throughput line on stderr.
"""

from .version import __version__, PROG_NAME
from .config import RunConfig, parse_rate_limit
from .core import LineRelay, TransferState, FileSource, StreamSource

__all__ = [
    "__version__",
    "PROG_NAME",
    "RunConfig",
    "parse_rate_limit",
    "LineRelay",
    "TransferState",
    "FileSource",
    "StreamSource",
]
