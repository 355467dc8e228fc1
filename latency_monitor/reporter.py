"""
Console rendering of live request lines and periodic window reports.
"""

import threading
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .aggregator import StatsAggregator
from .events import AccessRecord, AggregateWindow, LatencyStats
from .logging_config import get_logger
from .patterns import NORMAL_SEVERITY, SEVERITY_LEVELS

logger = get_logger(__name__)

DEFAULT_REPORT_INTERVAL = 30.0
DEFAULT_TOP_N = 10
BANNER_WIDTH = 42


def classify_latency(latency_ms: float) -> Tuple[str, str]:
    """Return (severity name, marker glyph) for a latency in milliseconds."""
    for name, threshold_ms, marker in SEVERITY_LEVELS:
        if latency_ms > threshold_ms:
            return name, marker
    return NORMAL_SEVERITY


def format_live_line(record: AccessRecord, now: Optional[datetime] = None) -> str:
    """Format the one-line console summary of a single request."""
    now = now or datetime.now()
    _, marker = classify_latency(record.latency_ms)
    return (
        f"[{now:%H:%M:%S}] {marker} {record.method} "
        f"{record.client_address}:{record.client_port} {record.path} - "
        f"Status: {record.status_code}, "
        f"Response: {record.latency_ms:.2f} ms ({record.latency_micros} μs)"
    )


def rank_paths(
    paths: Dict[str, LatencyStats], top_n: int = DEFAULT_TOP_N
) -> List[Tuple[str, LatencyStats]]:
    """Order paths by descending request count, ties by path, and cut to top_n."""
    ranked = sorted(paths.items(), key=lambda kv: (-kv[1].count, kv[0]))
    return ranked[:top_n]


def render_report(
    window: AggregateWindow,
    top_n: int = DEFAULT_TOP_N,
    interval: float = DEFAULT_REPORT_INTERVAL,
) -> List[str]:
    """Render a drained window as report lines.

    Returns an empty list for a window with no requests, so idle periods
    print nothing.
    """
    if window.is_empty():
        return []

    g = window.global_stats
    lines = [
        "",
        f"{'=' * 10} Statistics (last {interval:g}s) {'=' * 10}",
        (
            f"Overall: requests={g.count}, avg={g.avg_latency_ms:.2f} ms, "
            f"max={g.max_latency_ms:.2f} ms, min={g.min_latency_ms:.2f} ms, "
            f"slow requests={g.slow_count}"
        ),
        "",
        f"Per-path statistics (Top {top_n}):",
    ]
    for path, stats in rank_paths(window.paths, top_n):
        lines.append(
            f"  {path}: count={stats.count}, avg={stats.avg_latency_ms:.2f} ms, "
            f"max={stats.max_latency_ms:.2f} ms, min={stats.min_latency_ms:.2f} ms"
        )
    if window.unmatched_lines:
        lines.append(f"Unmatched lines: {window.unmatched_lines}")
    lines.append("=" * BANNER_WIDTH)
    lines.append("")
    return lines


class Reporter(threading.Thread):
    """Background thread that drains the aggregator on a fixed cadence."""

    def __init__(
        self,
        aggregator: StatsAggregator,
        stop_event: threading.Event,
        interval: float = DEFAULT_REPORT_INTERVAL,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        super().__init__(name="latency-reporter", daemon=True)
        self.aggregator = aggregator
        self.stop_event = stop_event
        self.interval = interval
        self.top_n = top_n

    def run(self) -> None:
        while not self.stop_event.wait(self.interval):
            self.report_once()

    def report_once(self) -> List[str]:
        """Drain the current window and log its report."""
        snapshot = self.aggregator.drain_and_reset()
        lines = render_report(snapshot, top_n=self.top_n, interval=self.interval)
        for line in lines:
            logger.info(line)
        return lines
