"""
Pytest configuration and shared fixtures for latency monitor tests.
"""

import io
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from latency_monitor.aggregator import StatsAggregator  # noqa: E402
from latency_monitor.logging_config import configure_logging  # noqa: E402


# =============================================================================
# SAMPLE LOG DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_log_lines():
    """Sample access log lines; the last three do not match the format."""
    return [
        '192.168.0.10 51234 - - [17/Oct/2026:10:00:00 +0900] "GET /api HTTP/1.1" 200 512 "-" "curl/8.0" 500000',
        '192.168.0.11 51235 - - [17/Oct/2026:10:00:01 +0900] "POST /api HTTP/1.1" 201 64 "https://example.com/" "Mozilla/5.0 (X11; Linux x86_64)" 2000000',
        '10.0.0.5 40000 - - [17/Oct/2026:10:00:02 +0900] "GET /other HTTP/2.0" 404 0 "" "" 100000',
        "Invalid line without any structure",
        '192.168.0.10 51234 - - [17/Oct/2026:10:00:03 +0900] "GET /api HTTP/1.1" 200 512 "-" "curl/8.0" slow',
        "",
    ]


@pytest.fixture
def make_line():
    """Factory for well-formed access log lines."""

    def _make(path="/api", latency=1000, method="GET", status=200, ip="127.0.0.1", port="5000"):
        return (
            f'{ip} {port} - - [17/Oct/2026:10:00:00 +0900] '
            f'"{method} {path} HTTP/1.1" {status} 128 "-" "pytest" {latency}'
        )

    return _make


# =============================================================================
# COMPONENT FIXTURES
# =============================================================================

@pytest.fixture
def aggregator():
    """Fresh StatsAggregator."""
    return StatsAggregator()


@pytest.fixture
def log_output():
    """Route package logging into a StringIO and return it."""
    stream = io.StringIO()
    configure_logging(stream=stream)
    yield stream
    configure_logging()


# =============================================================================
# TEMPORARY FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_log_file(tmp_path, sample_log_lines):
    """Create a temporary access log with pre-existing content."""
    log_file = tmp_path / "access.log"
    log_file.write_text("\n".join(sample_log_lines) + "\n")
    return log_file


@pytest.fixture
def clean_env(monkeypatch):
    """Isolated copy of os.environ without monitor settings."""
    env = dict(os.environ)
    for name in ("LOGDIR", "LATENCY_REPORT_INTERVAL", "LATENCY_POLL_INTERVAL", "LATENCY_TOP_N"):
        env.pop(name, None)
    monkeypatch.setattr(os, "environ", env)
    return env
