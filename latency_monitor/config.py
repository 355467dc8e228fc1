"""
Runtime settings loaded from the environment and an optional .env file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .reporter import DEFAULT_REPORT_INTERVAL, DEFAULT_TOP_N
from .source import DEFAULT_POLL_INTERVAL

LOG_PATH_ENV = "LOGDIR"
REPORT_INTERVAL_ENV = "LATENCY_REPORT_INTERVAL"
POLL_INTERVAL_ENV = "LATENCY_POLL_INTERVAL"
TOP_N_ENV = "LATENCY_TOP_N"


@dataclass
class Settings:
    """Resolved monitor settings."""

    log_path: str
    report_interval: float = DEFAULT_REPORT_INTERVAL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    top_n: int = DEFAULT_TOP_N


def _positive_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid value {raw!r}", setting=name) from None
    if value <= 0:
        raise ConfigurationError(f"Value must be positive, got {raw!r}", setting=name)
    return value


def load_settings(log_path: Optional[str] = None, env_file: Optional[str] = ".env") -> Settings:
    """Build Settings from the environment.

    Args:
        log_path: Explicit log file path; overrides LOGDIR when given.
        env_file: .env file to load first. Existing environment variables
            win over values in the file. None skips loading.

    Raises:
        ConfigurationError: If no log path is available or a tunable is invalid.
    """
    if env_file:
        load_dotenv(env_file, override=False)

    path = log_path or os.getenv(LOG_PATH_ENV, "").strip()
    if not path:
        raise ConfigurationError("No log file path configured", setting=LOG_PATH_ENV)

    return Settings(
        log_path=os.path.expanduser(path),
        report_interval=_positive_number(REPORT_INTERVAL_ENV, DEFAULT_REPORT_INTERVAL, float),
        poll_interval=_positive_number(POLL_INTERVAL_ENV, DEFAULT_POLL_INTERVAL, float),
        top_n=_positive_number(TOP_N_ENV, DEFAULT_TOP_N, int),
    )
