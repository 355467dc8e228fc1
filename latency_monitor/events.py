"""
Data classes for parsed access log records and windowed latency statistics.
"""

from dataclasses import dataclass
from typing import Dict

from .patterns import MIN_LATENCY_SENTINEL, SLOW_REQUEST_MICROS


@dataclass
class AccessRecord:
    """A single request parsed from one access log line.

    Attributes:
        client_address: Client IP address (or host token).
        client_port: Client source port, kept as text.
        timestamp: Raw timestamp between the brackets; not reparsed.
        method: HTTP method.
        path: Request path.
        protocol: Protocol token, e.g. HTTP/1.1.
        status_code: HTTP status code.
        body_bytes: Response body size.
        referer: Referer header, verbatim (may be "" or "-").
        user_agent: User-Agent header, verbatim.
        latency_micros: Response time in microseconds.
    """

    client_address: str
    client_port: str
    timestamp: str
    method: str
    path: str
    protocol: str
    status_code: int
    body_bytes: int
    referer: str
    user_agent: str
    latency_micros: int

    @property
    def latency_ms(self) -> float:
        return self.latency_micros / 1000.0


class LatencyStats:
    """Running latency counters for one path or for all traffic.

    Latencies are integers in microseconds. Python ints do not overflow,
    so the total is safe for any window size.

    Attributes:
        count: Number of samples.
        total_latency_micros: Sum of all samples.
        max_latency_micros: Largest sample (0 until the first sample).
        min_latency_micros: Smallest sample (sentinel until the first sample).
        slow_count: Samples above SLOW_REQUEST_MICROS.
    """

    __slots__ = (
        "count",
        "total_latency_micros",
        "max_latency_micros",
        "min_latency_micros",
        "slow_count",
    )

    count: int
    total_latency_micros: int
    max_latency_micros: int
    min_latency_micros: int
    slow_count: int

    def __init__(self) -> None:
        self.count = 0
        self.total_latency_micros = 0
        self.max_latency_micros = 0
        self.min_latency_micros = MIN_LATENCY_SENTINEL
        self.slow_count = 0

    def update(self, latency_micros: int) -> None:
        """Fold one sample into the counters. No validation is applied."""
        self.count += 1
        self.total_latency_micros += latency_micros
        if latency_micros > self.max_latency_micros:
            self.max_latency_micros = latency_micros
        if latency_micros < self.min_latency_micros:
            self.min_latency_micros = latency_micros
        if latency_micros > SLOW_REQUEST_MICROS:
            self.slow_count += 1

    @property
    def avg_latency_ms(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_latency_micros / self.count / 1000.0

    @property
    def max_latency_ms(self) -> float:
        return self.max_latency_micros / 1000.0

    @property
    def min_latency_ms(self) -> float:
        return self.min_latency_micros / 1000.0

    def __repr__(self) -> str:
        return (
            f"LatencyStats(count={self.count}, total={self.total_latency_micros}, "
            f"max={self.max_latency_micros}, min={self.min_latency_micros}, "
            f"slow={self.slow_count})"
        )


class AggregateWindow:
    """Everything accumulated since the previous report.

    Attributes:
        paths: Per-path statistics, in order of first appearance.
        global_stats: Statistics across all paths.
        unmatched_lines: Lines that did not fit the access log pattern.
    """

    __slots__ = ("paths", "global_stats", "unmatched_lines")

    paths: Dict[str, LatencyStats]
    global_stats: LatencyStats
    unmatched_lines: int

    def __init__(self) -> None:
        self.paths = {}
        self.global_stats = LatencyStats()
        self.unmatched_lines = 0

    def is_empty(self) -> bool:
        return self.global_stats.count == 0
