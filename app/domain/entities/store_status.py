from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StatusLabel(str, Enum):
    open = "open"
    closed = "closed"
    opening_soon = "opening_soon"
    closing_soon = "closing_soon"


@dataclass(frozen=True)
class StoreStatus:
    is_open: bool
    next_opening: str | None
    next_closing: str | None
    current_status: StatusLabel
