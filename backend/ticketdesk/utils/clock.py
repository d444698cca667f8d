"""
Clock helpers - wall-clock time source and time-derived identifiers.
"""

from datetime import datetime, timezone
from typing import Callable

# Any zero-argument callable returning an aware UTC datetime
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch for an aware datetime."""
    return int(moment.timestamp() * 1000)


def next_id(moment: datetime, last_id: int) -> int:
    """
    Derive a new identifier from a timestamp.

    Ids are epoch milliseconds, bumped past last_id so they stay strictly
    increasing even when the clock stalls or moves backwards.
    """
    return max(epoch_millis(moment), last_id + 1)
