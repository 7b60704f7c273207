# docthumbs/utils/time_utils.py
"""
Time helpers shared by the pipeline components.
"""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC timestamp (timezone-aware).

    Used for artifact and source item last-modified values so that
    modification-time based cache invalidation compares like with like.

    Returns:
        Current UTC datetime object
    """
    return datetime.now(timezone.utc)


def start_timer() -> float:
    """Return a monotonic reference point for elapsed_ms()."""
    return time.monotonic()


def elapsed_ms(started_at: float) -> int:
    """Milliseconds elapsed since a start_timer() reference point."""
    return int((time.monotonic() - started_at) * 1000)
