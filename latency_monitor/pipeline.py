"""
Tail loop wiring: source -> parser -> aggregator, plus the report thread.
"""

import threading
from datetime import datetime
from typing import Callable, Optional

from .aggregator import StatsAggregator
from .events import AccessRecord
from .logging_config import get_logger
from .parser import parse_line
from .reporter import DEFAULT_REPORT_INTERVAL, DEFAULT_TOP_N, Reporter, format_live_line
from .source import LineSource

logger = get_logger(__name__)


class Pipeline:
    """Runs the tail loop and the periodic reporter against one aggregator.

    The aggregator is built once at startup by the caller and shared by
    both threads for the lifetime of the pipeline.
    """

    def __init__(
        self,
        source: LineSource,
        aggregator: StatsAggregator,
        report_interval: float = DEFAULT_REPORT_INTERVAL,
        top_n: int = DEFAULT_TOP_N,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.source = source
        self.aggregator = aggregator
        self.report_interval = report_interval
        self.top_n = top_n
        self.clock = clock
        self.reporter: Optional[Reporter] = None

    def process_line(self, line: str) -> Optional[AccessRecord]:
        """Parse, aggregate and echo one line. Returns the record if it matched."""
        record = parse_line(line)
        if record is None:
            self.aggregator.record_unmatched()
            logger.debug("Skipped unmatched line: %r", line)
            return None

        self.aggregator.record(record.path, record.latency_micros)
        logger.info(format_live_line(record, now=self.clock()))
        return record

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """Tail the source until stop_event is set (or forever).

        The reporter thread is started here and stopped when the loop
        exits for any reason.
        """
        if stop_event is None:
            stop_event = threading.Event()

        self.reporter = Reporter(
            self.aggregator,
            stop_event,
            interval=self.report_interval,
            top_n=self.top_n,
        )
        self.reporter.start()

        try:
            for line in self.source.lines(stop_event):
                self.process_line(line)
        finally:
            stop_event.set()
            self.reporter.join(timeout=self.report_interval)
