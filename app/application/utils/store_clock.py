from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

STORE_TIMEZONE = "America/New_York"


def store_now(timezone: str = STORE_TIMEZONE) -> datetime:
    """Current aware time in the store's timezone."""
    return datetime.now(ZoneInfo(timezone))


def to_store_wall_time(moment: datetime, timezone: str = STORE_TIMEZONE) -> datetime:
    """
    Naive wall-clock datetime in the store timezone.

    Schedules are authored in store-local time, so aware instants are converted
    before comparison. Naive values are assumed to already be store wall time;
    the device-local zone is never consulted.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)
