"""
Integration tests for the tail -> parse -> aggregate -> report pipeline.

Tests the full workflow including:
- Tailing lines appended after startup
- Live line output
- Periodic reports from the background thread
- Deterministic shutdown through the stop event
"""

import threading
import time
from datetime import datetime

import pytest

from latency_monitor.aggregator import StatsAggregator
from latency_monitor.pipeline import Pipeline
from latency_monitor.source import LineSource


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def append_lines(path, lines):
    with open(path, "a", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def start_pipeline(pipeline, stop):
    thread = threading.Thread(target=pipeline.run, args=(stop,), daemon=True)
    thread.start()
    return thread


class TestProcessLine:
    """Tests for the per-line step."""

    def test_matched_line_recorded_and_echoed(self, tmp_path, make_line, log_output):
        pipeline = Pipeline(
            LineSource(str(tmp_path / "unused.log")),
            StatsAggregator(),
            clock=lambda: datetime(2026, 10, 17, 12, 0, 0),
        )
        record = pipeline.process_line(make_line(path="/api", latency=2500))

        assert record.path == "/api"
        assert "[12:00:00]" in log_output.getvalue()
        assert "/api - Status: 200, Response: 2.50 ms (2500 μs)" in log_output.getvalue()
        window = pipeline.aggregator.drain_and_reset()
        assert window.paths["/api"].count == 1

    def test_unmatched_line_counted_silently(self, tmp_path, log_output):
        pipeline = Pipeline(LineSource(str(tmp_path / "unused.log")), StatsAggregator())
        assert pipeline.process_line("garbage") is None
        assert log_output.getvalue() == ""
        assert pipeline.aggregator.drain_and_reset().unmatched_lines == 1


class TestTailing:
    """Tests running the pipeline against a live file."""

    def test_history_skipped_and_new_lines_processed(self, temp_log_file, make_line, log_output):
        aggregator = StatsAggregator()
        source = LineSource(str(temp_log_file), poll_interval=0.01).open()
        pipeline = Pipeline(source, aggregator=aggregator, report_interval=60)
        stop = threading.Event()
        thread = start_pipeline(pipeline, stop)

        append_lines(temp_log_file, [
            make_line(path="/api", latency=500000),
            "not an access log line",
            make_line(path="/api", latency=2000000),
            make_line(path="/other", latency=100000),
        ])
        assert wait_for(lambda: log_output.getvalue().count("Status:") == 3)

        stop.set()
        thread.join(timeout=5)
        source.close()
        assert not thread.is_alive()
        assert not pipeline.reporter.is_alive()

        window = aggregator.drain_and_reset()
        assert window.global_stats.count == 3
        assert window.global_stats.total_latency_micros == 2600000
        assert window.global_stats.slow_count == 1
        assert window.paths["/api"].count == 2
        assert window.paths["/api"].max_latency_micros == 2000000
        assert window.paths["/api"].min_latency_micros == 500000
        assert window.unmatched_lines == 1

    def test_periodic_report_emitted(self, temp_log_file, make_line, log_output):
        source = LineSource(str(temp_log_file), poll_interval=0.01).open()
        pipeline = Pipeline(source, StatsAggregator(), report_interval=0.05)
        stop = threading.Event()
        thread = start_pipeline(pipeline, stop)

        append_lines(temp_log_file, [make_line(path="/reported", latency=1000)])
        assert wait_for(lambda: "/reported: count=1" in log_output.getvalue())

        stop.set()
        thread.join(timeout=5)
        source.close()

        output = log_output.getvalue()
        assert output.count("Statistics (last") == 1
        assert "Overall: requests=1" in output


class TestConstruction:
    """Tests for wiring requirements."""

    def test_aggregator_is_required(self, tmp_path):
        with pytest.raises(TypeError):
            Pipeline(LineSource(str(tmp_path / "unused.log")))
