from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BookingStatus(str, Enum):
    confirmed = "confirmed"
    pending = "pending"
    cancelled = "cancelled"


@dataclass(frozen=True)
class Booking:
    id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:mm
    status: BookingStatus
    created_at: str  # ISO-8601, UTC
    user_id: str

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.cancelled


@dataclass(frozen=True)
class CancelResult:
    booking_id: str
    status: BookingStatus = BookingStatus.cancelled
