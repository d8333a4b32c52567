"""
Run configuration for the pv-like relay.

Values come from the command line, then the environment, then a ``.env``
file in the working directory, then the defaults below.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

RATE_LIMIT_ENV = "PVLIKE_RATE_LIMIT"
QUIET_ENV = "PVLIKE_QUIET"
LOG_LEVEL_ENV = "PVLIKE_LOG_LEVEL"

DEFAULT_RATE_LIMIT = 0  # 0 means no limit
DEFAULT_LOG_LEVEL = "WARNING"

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration resolved before the relay starts."""
    quiet: bool = False
    rate_limit_bytes_per_sec: int = DEFAULT_RATE_LIMIT

    def __post_init__(self):
        """Validate configuration on construction."""
        if self.rate_limit_bytes_per_sec < 0:
            raise ValueError("Rate limit must be zero (unlimited) or positive")

    @property
    def unlimited(self) -> bool:
        return self.rate_limit_bytes_per_sec == 0


def parse_rate_limit(text: Optional[str]) -> int:
    """
    Parse a rate limit argument the way ``atol`` would.

    Leading whitespace and an integer prefix are honoured ("12kb" is 12).
    Anything without a numeric prefix, and any negative value, means
    unlimited (0) rather than an error.
    """
    if text is None:
        return DEFAULT_RATE_LIMIT

    match = _LEADING_INTEGER.match(text)
    if not match:
        logger.debug(f"Rate limit {text!r} is not numeric, treating as unlimited")
        return DEFAULT_RATE_LIMIT

    value = int(match.group(1))
    if value < 0:
        logger.debug(f"Negative rate limit {value} treated as unlimited")
        return DEFAULT_RATE_LIMIT
    return value


def load_environment() -> bool:
    """Load a .env file from the working directory without overriding real env vars."""
    path = find_dotenv(usecwd=True)
    if not path:
        return False
    loaded = load_dotenv(path, override=False)
    logger.debug(f"Loaded environment from {path}")
    return loaded
