"""
Tests for throughput reports, observers and the tracker.
"""
import io
import logging

import pytest

from pvlike.core.state import TransferState
from pvlike.utils.progress_tracker import (
    LoggingObserver, ReportGenerator, TerminalObserver, ThroughputReport,
    ThroughputTracker, render_report
)


def test_rate_is_zero_when_no_time_has_elapsed(clock):
    state = TransferState(total_bytes=5000, start_time=clock.now())

    report = ReportGenerator(clock).generate(state)
    assert report.elapsed_seconds == 0
    assert report.rate_per_second == 0.0


def test_rate_is_zero_before_start(clock):
    report = ReportGenerator(clock).generate(TransferState(total_bytes=10))
    assert report.elapsed_seconds == 0
    assert report.rate_per_second == 0.0


def test_rate_is_average_over_whole_seconds(clock):
    state = TransferState(total_bytes=4096, start_time=clock.now())
    clock.advance(2)

    report = ReportGenerator(clock).generate(state)
    assert report.elapsed_seconds == 2
    assert report.rate_per_second == pytest.approx(2048.0)
    assert report.kilobytes_per_second == pytest.approx(2.0)


def test_elapsed_is_clamped_when_clock_goes_backwards(clock):
    state = TransferState(total_bytes=1, start_time=clock.now())
    clock.advance(-5)

    assert ReportGenerator(clock).generate(state).elapsed_seconds == 0


def test_render_report_overwrites_in_place():
    report = ThroughputReport(total_bytes=2048, elapsed_seconds=2, rate_per_second=1024.0)
    assert render_report(report) == "\r2048 bytes (   1.0 KB/s)"


def test_terminal_observer_writes_progress_and_final_newline():
    stream = io.StringIO()
    observer = TerminalObserver(stream)
    report = ThroughputReport(total_bytes=3, elapsed_seconds=0, rate_per_second=0.0)

    observer.on_update(report)
    observer.on_update(report)
    observer.on_finish(report)

    assert stream.getvalue() == "\r3 bytes (   0.0 KB/s)" * 2 + "\n"


def test_break_line_only_when_progress_is_showing():
    stream = io.StringIO()
    observer = TerminalObserver(stream)

    observer.break_line()
    assert stream.getvalue() == ""

    observer.on_update(ThroughputReport(1, 0, 0.0))
    observer.break_line()
    observer.break_line()
    assert stream.getvalue().endswith("KB/s)\n")


def test_tracker_start_time_is_captured_once(clock):
    state = TransferState()
    tracker = ThroughputTracker(state, [], clock)

    tracker.start()
    first = state.start_time
    clock.advance(10)
    tracker.start()

    assert state.start_time == first


def test_tracker_counts_without_observers(clock):
    state = TransferState()
    tracker = ThroughputTracker(state, None, clock)
    tracker.start()

    for n in (3, 4, 5):
        tracker.update(n)
    tracker.finish()

    assert state.total_bytes == 12
    assert tracker.get_current_report().total_bytes == 12


def test_tracker_notifies_observers(clock):
    stream = io.StringIO()
    state = TransferState()
    tracker = ThroughputTracker(state, [TerminalObserver(stream)], clock)
    tracker.start()

    tracker.update(1024)
    clock.advance(1)
    tracker.update(1024)
    tracker.finish()

    assert stream.getvalue() == (
        "\r1024 bytes (   0.0 KB/s)"
        "\r2048 bytes (   2.0 KB/s)"
        "\n"
    )


def test_logging_observer_logs_summary(clock, caplog):
    observer = LoggingObserver(logging.getLogger("pvlike.progress"), clock)

    with caplog.at_level(logging.INFO, logger="pvlike.progress"):
        observer.on_finish(ThroughputReport(total_bytes=2048, elapsed_seconds=2, rate_per_second=1024.0))

    assert "2048 bytes" in caplog.text
    assert "1.0 KB/s" in caplog.text
