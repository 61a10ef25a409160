from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Sequence

from app.application.exceptions import InvalidScheduleError
from app.application.utils.time_range import format_hhmm, parse_date, resolve_hours
from app.domain.entities.booking import Booking
from app.domain.entities.override import Override
from app.domain.entities.time_slot import TimeSlot
from app.domain.entities.weekly_rule import WeeklyRule

SLOT_INTERVAL_MINUTES = 30

logger = logging.getLogger(__name__)


def generate_slots(
    target_date: date | str,
    rules: Sequence[WeeklyRule],
    overrides: Sequence[Override],
    interval_minutes: int = SLOT_INTERVAL_MINUTES,
) -> list[TimeSlot]:
    """
    Bookable slots for a date in store wall time.

    A slot is emitted only when its full width fits before the closing time;
    hours whose end is earlier than their start run past midnight.
    Closed dates (by override, by weekly rule, or with no rule at all) yield [].
    """
    if interval_minutes <= 0:
        raise InvalidScheduleError(f"Slot interval must be positive, got {interval_minutes}")

    hours = resolve_hours(target_date, rules, overrides)
    effective = hours.effective_range
    if effective is None or effective.width_minutes <= 0:
        return []

    slots: list[TimeSlot] = []
    current = effective.start_minutes
    while current + interval_minutes <= effective.end_minutes:
        slots.append(TimeSlot(time=format_hhmm(current)))
        current += interval_minutes

    logger.debug(
        "Slots generated",
        extra={"date": str(target_date), "reason": hours.source, "slot_count": len(slots)},
    )
    return slots


def mark_booked_slots(
    slots: Iterable[TimeSlot],
    bookings: Iterable[Booking],
    target_date: date | str,
) -> list[TimeSlot]:
    """Flag slots already taken by a non-cancelled booking on the same date."""
    day = parse_date(target_date).isoformat()
    taken = {b.time for b in bookings if b.date == day and b.is_active}
    return [replace(slot, is_available=False) if slot.time in taken else slot for slot in slots]


def select_slot(slots: Iterable[TimeSlot], time: str | None) -> list[TimeSlot]:
    """Mark exactly one available slot as selected; time=None clears the selection."""
    selected: list[TimeSlot] = []
    for slot in slots:
        is_selected = time is not None and slot.time == time and slot.is_available
        selected.append(replace(slot, is_selected=is_selected))
    return selected
