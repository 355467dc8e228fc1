"""
Thread-safe aggregation of request latencies into reporting windows.
"""

import threading

from .events import AggregateWindow, LatencyStats


class StatsAggregator:
    """Owns the live AggregateWindow.

    The tail loop calls record() for every parsed request while the
    reporter thread periodically calls drain_and_reset(). A single lock
    makes the two mutually exclusive, so a drained snapshot never mixes
    samples from both sides of the swap and is never mutated afterwards.

    The per-path map grows with the number of distinct paths seen in one
    window; nothing caps it.
    """

    def __init__(self) -> None:
        self._window = AggregateWindow()
        self._lock = threading.Lock()

    def record(self, path: str, latency_micros: int) -> None:
        """Add one request sample to the path and global statistics."""
        with self._lock:
            stats = self._window.paths.get(path)
            if stats is None:
                stats = LatencyStats()
                self._window.paths[path] = stats
            stats.update(latency_micros)
            self._window.global_stats.update(latency_micros)

    def record_unmatched(self) -> None:
        """Count one line the parser could not match."""
        with self._lock:
            self._window.unmatched_lines += 1

    def drain_and_reset(self) -> AggregateWindow:
        """Swap in a fresh window and return the previous one.

        The caller owns the returned window exclusively.
        """
        with self._lock:
            snapshot = self._window
            self._window = AggregateWindow()
        return snapshot
