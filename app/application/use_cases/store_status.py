from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Sequence

from app.application.utils.store_clock import STORE_TIMEZONE, to_store_wall_time
from app.application.utils.time_range import format_hhmm, parse_date, parse_hhmm, resolve_hours
from app.domain.entities.override import Override
from app.domain.entities.store_status import StatusLabel, StoreStatus
from app.domain.entities.weekly_rule import WeeklyRule

OPENING_SOON_MINUTES = 60
CLOSING_SOON_MINUTES = 30


def get_status(
    target_date: date | str,
    rules: Sequence[WeeklyRule],
    overrides: Sequence[Override],
    now: datetime,
    timezone: str = STORE_TIMEZONE,
    opening_soon_minutes: int = OPENING_SOON_MINUTES,
    closing_soon_minutes: int = CLOSING_SOON_MINUTES,
) -> StoreStatus:
    """
    Classify `now` against the effective hours of `target_date`.

    The open window is inclusive on both ends. Minute distances are whole
    minutes, truncated. `is_open` only reflects whether `now` is inside the
    window; the soon-labels refine `current_status`.
    """
    target = parse_date(target_date)
    hours = resolve_hours(target, rules, overrides)
    effective = hours.effective_range

    if effective is None:
        next_opening = format_hhmm(parse_hhmm(hours.start_time, "start_time")) if hours.start_time else None
        return StoreStatus(
            is_open=False,
            next_opening=next_opening,
            next_closing=None,
            current_status=StatusLabel.closed,
        )

    midnight = datetime.combine(target, time.min)
    start = midnight + timedelta(minutes=effective.start_minutes)
    end = midnight + timedelta(minutes=effective.end_minutes)
    wall_now = to_store_wall_time(now, timezone)

    is_open = start <= wall_now <= end
    if is_open:
        minutes_until_close = _whole_minutes(end - wall_now)
        label = StatusLabel.closing_soon if minutes_until_close <= closing_soon_minutes else StatusLabel.open
    else:
        label = StatusLabel.closed
        if wall_now < start:
            minutes_until_open = _whole_minutes(start - wall_now)
            if 0 < minutes_until_open <= opening_soon_minutes:
                label = StatusLabel.opening_soon

    return StoreStatus(
        is_open=is_open,
        next_opening=format_hhmm(effective.start_minutes),
        next_closing=format_hhmm(effective.end_minutes),
        current_status=label,
    )


def _whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)
