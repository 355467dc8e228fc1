"""
Logging configuration for the latency monitor.

The monitor has no separate output layer: live request lines, the
periodic report and startup errors are all log records in the
``latency_monitor`` namespace. One stdout handler on that namespace
prints the bare message, so a live line looks like

    [10:00:01] 🟢 GET 10.0.0.5:40000 /api - Status: 200, Response: 12.30 ms (12300 μs)

Skipped lines and tail events are DEBUG records; ``--debug`` shows them
and ``--quiet`` keeps only warnings (truncation, read errors) and errors.

Tests redirect everything with ``configure_logging(stream=StringIO())``.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "latency_monitor"

# Format strings
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(message)s"

_configured: bool = False


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
    simple_mode: bool = True,
) -> None:
    """
    Install the single console handler on the package logger.

    Calling it again replaces the previous handler, so output never
    doubles up.

    Args:
        level: Threshold for the package logger (default: INFO, which
            includes live lines and reports).
        format_string: Custom format string. If None, SIMPLE_FORMAT or
            DEFAULT_FORMAT is chosen by simple_mode.
        stream: Output stream (default: sys.stdout).
        simple_mode: Print bare messages; False adds time, logger and level.
    """
    global _configured

    if format_string is None:
        format_string = SIMPLE_FORMAT if simple_mode else DEFAULT_FORMAT

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(format_string))

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Keep report output off any handlers the host application installs
    package_logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, installing the console handler on first use."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)


def set_level(level: int) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def enable_debug() -> None:
    """Show skipped lines and tail events."""
    set_level(logging.DEBUG)


def enable_quiet() -> None:
    """Hide live lines and reports; keep warnings and errors."""
    set_level(logging.WARNING)


def set_verbosity(debug: bool = False, quiet: bool = False) -> None:
    """Apply the --debug / --quiet command line flags."""
    if debug:
        enable_debug()
    elif quiet:
        enable_quiet()
