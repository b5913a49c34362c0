"""
Timestamp utilities for consistent time handling across the system.
"""

import time
from datetime import datetime, timezone
from typing import Optional

MS_PER_DAY = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Current time as milliseconds since the epoch."""
    return int(time.time() * 1000)


def days_to_ms(days: float) -> int:
    """Convert a number of days to milliseconds."""
    return int(days * MS_PER_DAY)


def to_iso(timestamp: Optional[float] = None) -> str:
    """Convert timestamp to an ISO-8601 string in UTC.

    Args:
        timestamp: Unix timestamp in seconds (optional, uses current time if None)

    Returns:
        ISO-8601 formatted string
    """
    if timestamp is None:
        timestamp = time.time()
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()
