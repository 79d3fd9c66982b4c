"""Timezone helpers."""

from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo


@lru_cache(maxsize=16)
def _zone(tz_name: str) -> ZoneInfo:
    return ZoneInfo(tz_name)


def to_local_time(timestamp: datetime, tz_name: str) -> datetime:
    """Convert an aware timestamp to the given timezone."""
    if timestamp.tzinfo is None:
        raise ValueError("timestamp must be timezone-aware")
    return timestamp.astimezone(_zone(tz_name))
