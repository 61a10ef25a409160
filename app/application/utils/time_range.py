from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from app.application.exceptions import InvalidDateError, InvalidScheduleError
from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule

MINUTES_PER_DAY = 24 * 60

# Seconds are tolerated for upstream payloads that send "HH:mm:ss" and are ignored.
_HHMM_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Leap year so that 29/2 is a valid override.
_REFERENCE_LEAP_YEAR = 2000


@dataclass(frozen=True)
class EffectiveRange:
    """Minutes since midnight. end_minutes may exceed a day for overnight hours."""

    start_minutes: int
    end_minutes: int

    @classmethod
    def from_times(cls, start_time: str, end_time: str) -> "EffectiveRange":
        start = parse_hhmm(start_time, "start_time")
        end = parse_hhmm(end_time, "end_time")
        if end < start:
            end += MINUTES_PER_DAY
        return cls(start_minutes=start, end_minutes=end)

    @property
    def width_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


@dataclass(frozen=True)
class ResolvedHours:
    source: str | None  # "override", "weekly" or None when nothing matched
    is_open: bool
    start_time: str | None
    end_time: str | None

    @property
    def effective_range(self) -> EffectiveRange | None:
        if not self.is_open or not self.start_time or not self.end_time:
            return None
        return EffectiveRange.from_times(self.start_time, self.end_time)


CLOSED_NO_SOURCE = ResolvedHours(source=None, is_open=False, start_time=None, end_time=None)


def parse_hhmm(value: str | None, field: str = "time") -> int:
    """Parse "HH:mm" into minutes since midnight."""
    if not isinstance(value, str):
        raise InvalidScheduleError(f"{field} must be an HH:mm string, got {value!r}")
    match = _HHMM_RE.match(value.strip())
    if not match:
        raise InvalidScheduleError(f"{field} is not a valid HH:mm time: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_hhmm(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_valid_hhmm(value: str | None) -> bool:
    try:
        parse_hhmm(value)
    except InvalidScheduleError:
        return False
    return True


def parse_date(value: date | str) -> date:
    """Accept a date (or datetime) or a "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _DATE_RE.match(value.strip()):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidDateError(f"Invalid date: {value!r}") from e
    raise InvalidDateError(f"Date must be YYYY-MM-DD, got {value!r}")


def sunday_first_weekday(target: date) -> int:
    """0=Sunday ... 6=Saturday, matching WeeklyRule.day_of_week."""
    return (target.weekday() + 1) % 7


def validate_rules(rules: Iterable[WeeklyRule]) -> None:
    for rule in rules:
        if not isinstance(rule.day_of_week, int) or not 0 <= rule.day_of_week <= 6:
            raise InvalidScheduleError(f"day_of_week out of range 0-6: {rule.day_of_week!r}")
        _validate_times(rule.is_open, rule.start_time, rule.end_time, f"weekly rule day_of_week={rule.day_of_week}")


def validate_overrides(overrides: Iterable[Override]) -> None:
    for override in overrides:
        if not isinstance(override.month, int) or not 1 <= override.month <= 12:
            raise InvalidScheduleError(f"month out of range 1-12: {override.month!r}")
        max_day = calendar.monthrange(_REFERENCE_LEAP_YEAR, override.month)[1]
        if not isinstance(override.day, int) or not 1 <= override.day <= max_day:
            raise InvalidScheduleError(
                f"day out of range 1-{max_day} for month {override.month}: {override.day!r}"
            )
        _validate_times(
            override.is_open,
            override.start_time,
            override.end_time,
            f"override {override.day}/{override.month}",
        )


def _validate_times(is_open: bool, start_time: str | None, end_time: str | None, label: str) -> None:
    # Closed records may omit times; anything present must still parse.
    for field, value in (("start_time", start_time), ("end_time", end_time)):
        if value in (None, "") and not is_open:
            continue
        parse_hhmm(value, f"{label} {field}")


def find_override(target: date, overrides: Sequence[Override]) -> Override | None:
    for override in overrides:
        if override.day == target.day and override.month == target.month:
            return override
    return None


def find_weekly_rule(target: date, rules: Sequence[WeeklyRule]) -> WeeklyRule | None:
    weekday = sunday_first_weekday(target)
    for rule in rules:
        if rule.day_of_week == weekday:
            return rule
    return None


def resolve_hours(
    target_date: date | str,
    rules: Sequence[WeeklyRule],
    overrides: Sequence[Override],
) -> ResolvedHours:
    """Apply override precedence: override for (day, month), else weekly rule, else closed."""
    target = parse_date(target_date)
    validate_rules(rules)
    validate_overrides(overrides)

    override = find_override(target, overrides)
    if override is not None:
        return ResolvedHours(
            source="override",
            is_open=override.is_open,
            start_time=override.start_time or None,
            end_time=override.end_time or None,
        )

    rule = find_weekly_rule(target, rules)
    if rule is None:
        return CLOSED_NO_SOURCE
    return ResolvedHours(
        source="weekly",
        is_open=rule.is_open,
        start_time=rule.start_time or None,
        end_time=rule.end_time or None,
    )
