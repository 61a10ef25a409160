from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Override:
    day: int  # 1-31
    month: int  # 1-12, no year: recurs every year
    is_open: bool
    start_time: str | None = None  # "HH:mm"
    end_time: str | None = None  # "HH:mm"
