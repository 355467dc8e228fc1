"""
Parser for the fixed positional access log format.

Lines that do not fit the pattern are not errors; parse_line returns None
and the caller decides what to do with them.
"""

from typing import Optional

from .events import AccessRecord
from .patterns import ACCESS_LOG_PATTERN


def parse_line(line: str) -> Optional[AccessRecord]:
    """Parse one raw log line.

    Args:
        line: A single line, with or without its line terminator.

    Returns:
        The parsed AccessRecord, or None if any field fails to match.
    """
    match = ACCESS_LOG_PATTERN.match(line.rstrip("\r\n"))
    if not match:
        return None

    return AccessRecord(
        client_address=match.group("ip"),
        client_port=match.group("port"),
        timestamp=match.group("timestamp"),
        method=match.group("method"),
        path=match.group("path"),
        protocol=match.group("protocol"),
        status_code=int(match.group("status")),
        body_bytes=int(match.group("bytes")),
        referer=match.group("referer"),
        user_agent=match.group("user_agent"),
        latency_micros=int(match.group("latency")),
    )


def format_record(record: AccessRecord) -> str:
    """Render a record back into the access log line format (no newline)."""
    return (
        f"{record.client_address} {record.client_port} - - "
        f"[{record.timestamp}] "
        f'"{record.method} {record.path} {record.protocol}" '
        f"{record.status_code} {record.body_bytes} "
        f'"{record.referer}" "{record.user_agent}" '
        f"{record.latency_micros}"
    )
