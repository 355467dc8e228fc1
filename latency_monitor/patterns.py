"""
Regex pattern and thresholds for access log parsing and classification.
"""

import re

# =============================================================================
# ACCESS LOG LINE PATTERN
# =============================================================================

# 192.168.0.10 51234 - - [17/Oct/2026:10:00:00 +0900] "GET /api HTTP/1.1" 200 512 "-" "curl/8.0" 1234
ACCESS_LOG_PATTERN = re.compile(
    r'^(?P<ip>\S+) (?P<port>[0-9]+) - - '
    r'\[(?P<timestamp>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>\S+) (?P<protocol>\S+)" '
    r'(?P<status>[0-9]+) (?P<bytes>[0-9]+) '
    r'"(?P<referer>[^"]*)" "(?P<user_agent>[^"]*)" '
    r'(?P<latency>[0-9]+)(?=\s|$)',
    re.ASCII,
)

# =============================================================================
# LATENCY THRESHOLDS
# =============================================================================

# Requests slower than this are counted as slow (1 second)
SLOW_REQUEST_MICROS = 1_000_000

# Sentinel minimum; any realistic sample replaces it
MIN_LATENCY_SENTINEL = 999_999_999

# Live line severity markers, checked in order against latency in ms
SEVERITY_LEVELS = (
    ("critical", 1000.0, "\U0001F534"),
    ("warning", 500.0, "\U0001F7E1"),
)
NORMAL_SEVERITY = ("normal", "\U0001F7E2")
