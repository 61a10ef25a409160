from __future__ import annotations

from datetime import date, datetime, timedelta

from app.application.utils.time_range import parse_date, parse_hhmm

DAYS_AHEAD = 30


def generate_date_list(today: date, days_ahead: int = DAYS_AHEAD) -> list[str]:
    """YYYY-MM-DD strings for `days_ahead` consecutive days starting at today."""
    return [(today + timedelta(days=offset)).isoformat() for offset in range(max(0, days_ahead))]


def format_time_for_display(value: str) -> str:
    """"13:30" -> "1:30 PM"."""
    minutes = parse_hhmm(value)
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def format_date_for_display(value: date | str) -> str:
    """"2024-12-25" -> "Dec 25, 2024"."""
    return parse_date(value).strftime("%b %d, %Y")


def format_clock_for_display(moment: datetime) -> str:
    return moment.strftime("%b %d, %Y %H:%M")
