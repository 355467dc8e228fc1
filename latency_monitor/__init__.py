"""
Access Log Latency Monitor

Tails a growing access log, prints one line per request and reports
windowed latency statistics, overall and per path, on a fixed interval.
"""

from .aggregator import StatsAggregator
from .config import Settings, load_settings
from .events import AccessRecord, AggregateWindow, LatencyStats
from .exceptions import ConfigurationError, LatencyMonitorError, LogSourceError
from .parser import format_record, parse_line
from .patterns import ACCESS_LOG_PATTERN, MIN_LATENCY_SENTINEL, SLOW_REQUEST_MICROS
from .pipeline import Pipeline
from .reporter import Reporter, classify_latency, format_live_line, rank_paths, render_report
from .source import LineSource

__all__ = [
    # Pipeline
    "Pipeline",
    "LineSource",
    "StatsAggregator",
    "Reporter",
    # Data classes
    "AccessRecord",
    "LatencyStats",
    "AggregateWindow",
    # Parsing
    "parse_line",
    "format_record",
    # Reporting
    "classify_latency",
    "format_live_line",
    "rank_paths",
    "render_report",
    # Configuration
    "Settings",
    "load_settings",
    # Exceptions
    "LatencyMonitorError",
    "ConfigurationError",
    "LogSourceError",
    # Patterns
    "ACCESS_LOG_PATTERN",
    "SLOW_REQUEST_MICROS",
    "MIN_LATENCY_SENTINEL",
]

__version__ = "1.0.0"
