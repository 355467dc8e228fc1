"""
Command line entry point for the access log latency monitor.
"""

import argparse
import sys
from typing import List, Optional

from .aggregator import StatsAggregator
from .config import LOG_PATH_ENV, load_settings
from .exceptions import ConfigurationError, LogSourceError
from .logging_config import get_logger, set_verbosity
from .pipeline import Pipeline
from .source import LineSource

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="latency-monitor",
        description="Tail an access log and report request latency every interval.",
    )
    parser.add_argument(
        "log_file",
        nargs="?",
        help=f"Access log to tail (default: ${LOG_PATH_ENV})",
    )
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    parser.add_argument(
        "--from-start",
        action="store_true",
        help="Process existing file content instead of skipping to the end",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Log skipped lines and tail events")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    set_verbosity(debug=args.debug, quiet=args.quiet)

    try:
        settings = load_settings(args.log_file, env_file=args.env_file)
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        return 1

    source = LineSource(
        settings.log_path,
        poll_interval=settings.poll_interval,
        from_start=args.from_start,
    )
    try:
        source.open()
    except LogSourceError as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("Watching %s ... (Ctrl+C to stop)", settings.log_path)
    logger.info("=" * 42)

    aggregator = StatsAggregator()
    pipeline = Pipeline(
        source,
        aggregator=aggregator,
        report_interval=settings.report_interval,
        top_n=settings.top_n,
    )
    try:
        pipeline.run()
    except KeyboardInterrupt:
        logger.info("\nStopped.")
    finally:
        source.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
