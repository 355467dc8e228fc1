"""
Custom exceptions for access log latency monitoring.

This module defines the small hierarchy of errors that can stop the
monitor at startup. Malformed log lines are not errors: the parser
reports them by returning None.
"""

from typing import Optional


class LatencyMonitorError(Exception):
    """Base exception for all latency monitor errors."""

    pass


class ConfigurationError(LatencyMonitorError):
    """Raised when required settings are missing or invalid.

    Attributes:
        setting: Name of the offending setting (if applicable).
    """

    def __init__(self, message: str, setting: Optional[str] = None) -> None:
        self.setting = setting
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.setting:
            return f"{base} (setting: {self.setting})"
        return base


class LogSourceError(LatencyMonitorError):
    """Raised when the access log cannot be opened for tailing.

    Attributes:
        file_path: Path to the file that could not be opened.
    """

    def __init__(self, message: str, file_path: Optional[str] = None) -> None:
        self.file_path = file_path
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.file_path:
            return f"{base} (file: {self.file_path})"
        return base
