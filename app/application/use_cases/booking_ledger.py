from __future__ import annotations

import json
import logging
import re
import secrets
from dataclasses import replace
from datetime import datetime, timezone
from time import time_ns
from typing import Any, Callable

from app.application.exceptions import (
    BookingNotFoundError,
    InvalidBookingError,
    InvalidDateError,
    LedgerPersistenceError,
)
from app.application.ports.key_value_store import KeyValueStorePort
from app.application.utils.time_range import is_valid_hhmm, parse_date
from app.domain.entities.booking import Booking, BookingStatus, CancelResult

# Matched with fullmatch against the raw value: stored strings must equal slot strings exactly.
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"\d{2}:\d{2}")


def bookings_key(user_id: str) -> str:
    return f"bookings_{user_id}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookingLedger:
    """
    Per-user booking log persisted as one JSON array per user key.

    create() and cancel() read the whole list, change it and write it back.
    There is no lock around that cycle: two overlapping calls for the same
    user race and the last write wins. Callers serialize booking actions.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def create(self, date: str, time: str, user_id: str) -> Booking:
        """Append a confirmed booking. The schedule is not re-checked here."""
        _require_user(user_id)
        if not isinstance(date, str) or not _DATE_RE.fullmatch(date):
            raise InvalidBookingError(f"Booking date must be YYYY-MM-DD, got {date!r}")
        try:
            parse_date(date)
        except InvalidDateError as e:
            raise InvalidBookingError(str(e)) from e
        if not isinstance(time, str) or not _TIME_RE.fullmatch(time) or not is_valid_hhmm(time):
            raise InvalidBookingError(f"Booking time must be HH:mm, got {time!r}")

        bookings = await self._load(user_id)
        booking = Booking(
            id=_new_booking_id(),
            date=date,
            time=time,
            status=BookingStatus.confirmed,
            created_at=_iso_utc(self._clock()),
            user_id=user_id,
        )
        bookings.append(booking)
        await self._save(user_id, bookings)

        self._logger.info(
            "Booking created",
            extra={"user_id": user_id, "booking_id": booking.id, "date": date, "time": time},
        )
        return booking

    async def cancel(self, booking_id: str, user_id: str) -> CancelResult:
        """Flip a booking to cancelled. Cancelling twice is a no-op success."""
        _require_user(user_id)
        bookings = await self._load(user_id)

        for index, booking in enumerate(bookings):
            if booking.id == booking_id:
                break
        else:
            self._logger.warning(
                "Booking not found", extra={"user_id": user_id, "booking_id": booking_id}
            )
            raise BookingNotFoundError(booking_id, user_id)

        if booking.status != BookingStatus.cancelled:
            bookings[index] = replace(booking, status=BookingStatus.cancelled)
            await self._save(user_id, bookings)
            self._logger.info(
                "Booking cancelled",
                extra={"user_id": user_id, "booking_id": booking_id, "status": "cancelled"},
            )

        return CancelResult(booking_id=booking_id)

    async def list(self, user_id: str) -> list[Booking]:
        _require_user(user_id)
        return await self._load(user_id)

    async def clear(self, user_id: str) -> None:
        """Drop every booking of the user. Local only and not recoverable."""
        _require_user(user_id)
        key = bookings_key(user_id)
        try:
            await self._store.delete(key)
        except Exception as e:
            self._logger.exception("Failed to clear bookings", extra={"user_id": user_id, "key": key})
            raise LedgerPersistenceError(f"Failed to clear bookings for {user_id!r}") from e
        self._logger.info("Bookings cleared", extra={"user_id": user_id})

    async def _load(self, user_id: str) -> list[Booking]:
        key = bookings_key(user_id)
        try:
            raw = await self._store.get(key)
        except Exception as e:
            self._logger.exception("Failed to read bookings", extra={"user_id": user_id, "key": key})
            raise LedgerPersistenceError(f"Failed to read bookings for {user_id!r}") from e

        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("stored bookings value is not a list")
            bookings = [_deserialize_booking(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            self._logger.exception("Unreadable bookings value", extra={"user_id": user_id, "key": key})
            raise LedgerPersistenceError(f"Stored bookings for {user_id!r} are corrupted") from e

        return bookings

    async def _save(self, user_id: str, bookings: list[Booking]) -> None:
        key = bookings_key(user_id)
        payload = json.dumps([_serialize_booking(b) for b in bookings], ensure_ascii=False)
        try:
            await self._store.set(key, payload)
        except Exception as e:
            self._logger.exception("Failed to write bookings", extra={"user_id": user_id, "key": key})
            raise LedgerPersistenceError(f"Failed to write bookings for {user_id!r}") from e


def _require_user(user_id: str) -> None:
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidBookingError("user_id is required")


def _new_booking_id() -> str:
    # Nanosecond timestamp keeps ids time-ordered; the suffix separates same-tick calls.
    return f"{time_ns()}-{secrets.token_hex(4)}"


def _iso_utc(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _serialize_booking(booking: Booking) -> dict[str, Any]:
    """camelCase keys, the layout the mobile client stores."""
    return {
        "id": booking.id,
        "date": booking.date,
        "time": booking.time,
        "status": booking.status.value,
        "createdAt": booking.created_at,
        "userId": booking.user_id,
    }


def _deserialize_booking(data: dict[str, Any]) -> Booking:
    return Booking(
        id=str(data["id"]),
        date=data["date"],
        time=data["time"],
        status=BookingStatus(data["status"]),
        created_at=data.get("createdAt") or data.get("created_at") or "",
        user_id=data.get("userId") or data.get("user_id") or "",
    )
