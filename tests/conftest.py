"""
Shared fixtures: a controllable clock and a sleep recorder so no test
depends on wall time or actually sleeps.
"""
import pytest

from pvlike.config import LOG_LEVEL_ENV, QUIET_ENV, RATE_LIMIT_ENV


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.value = start

    def now(self) -> float:
        return self.value

    def advance(self, seconds: float):
        self.value += seconds


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds: float):
        self.calls.append(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (RATE_LIMIT_ENV, QUIET_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
