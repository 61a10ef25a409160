from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    time: str  # "HH:mm" wall time
    is_available: bool = True
    is_selected: bool = False
