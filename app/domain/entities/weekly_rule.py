from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WeeklyRule:
    day_of_week: int  # 0-6, Sunday=0
    is_open: bool
    start_time: str | None = None  # "HH:mm"
    end_time: str | None = None  # "HH:mm"
