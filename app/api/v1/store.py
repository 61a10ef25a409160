from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from app.api.v1.schemas import (
    BookingListResponseSchema,
    BookingSchema,
    CancelBookingResponseSchema,
    CreateBookingRequestSchema,
    DatesResponseSchema,
    ScheduleRefreshResponseSchema,
    SlotsResponseSchema,
    StoreInfoSchema,
    StoreStatusSchema,
    TimeSlotSchema,
)
from app.application.exceptions import (
    BookingNotFoundError,
    InvalidBookingError,
    InvalidDateError,
    InvalidScheduleError,
    LedgerPersistenceError,
    ScheduleFetchError,
)
from app.application.use_cases.booking_ledger import BookingLedger
from app.application.use_cases.generate_slots import generate_slots, mark_booked_slots, select_slot
from app.application.use_cases.load_schedule import ScheduleService
from app.application.use_cases.store_status import get_status
from app.application.utils.display import (
    format_clock_for_display,
    format_date_for_display,
    format_time_for_display,
    generate_date_list,
)
from app.application.utils.greeting import build_greeting
from app.application.utils.store_clock import store_now
from app.application.utils.time_range import parse_date
from app.core.config import settings
from app.domain.entities.booking import Booking
from app.domain.entities.schedule import Schedule
from app.wiring.dependencies import get_booking_ledger, get_schedule_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _load_schedule(service: ScheduleService) -> Schedule:
    try:
        return service.current()
    except ScheduleFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except InvalidScheduleError as e:
        logger.error("Upstream schedule rejected", extra={"reason": str(e)})
        raise HTTPException(status_code=502, detail=f"Invalid schedule data: {e}")


def _booking_schema(booking: Booking) -> BookingSchema:
    return BookingSchema(
        id=booking.id,
        date=booking.date,
        time=booking.time,
        display_date=format_date_for_display(booking.date),
        display_time=format_time_for_display(booking.time),
        status=booking.status,
        created_at=booking.created_at,
        user_id=booking.user_id,
    )


@router.post("/schedule/refresh", response_model=ScheduleRefreshResponseSchema)
def refresh_schedule(
    service: ScheduleService = Depends(get_schedule_service),
) -> ScheduleRefreshResponseSchema:
    """Re-fetch weekly rules and overrides, replacing the cached schedule."""
    try:
        schedule = service.refresh()
    except ScheduleFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except InvalidScheduleError as e:
        logger.error("Upstream schedule rejected", extra={"reason": str(e)})
        raise HTTPException(status_code=502, detail=f"Invalid schedule data: {e}")
    return ScheduleRefreshResponseSchema(
        rule_count=len(schedule.rules),
        override_count=len(schedule.overrides),
    )


@router.get("/store", response_model=StoreInfoSchema)
def store_info() -> StoreInfoSchema:
    now = store_now(settings.STORE_TIMEZONE)
    return StoreInfoSchema(
        name=settings.STORE_NAME,
        timezone=settings.STORE_TIMEZONE,
        greeting=build_greeting(now.hour),
        now=format_clock_for_display(now),
    )


@router.get("/dates", response_model=DatesResponseSchema)
def dates() -> DatesResponseSchema:
    today = store_now(settings.STORE_TIMEZONE).date()
    return DatesResponseSchema(dates=generate_date_list(today, settings.DAYS_AHEAD))


@router.get("/slots", response_model=SlotsResponseSchema)
async def slots(
    date: str = Query(...),
    selected: str | None = Query(None),
    x_user_id: str | None = Header(None),
    service: ScheduleService = Depends(get_schedule_service),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> SlotsResponseSchema:
    schedule = _load_schedule(service)
    try:
        day = parse_date(date).isoformat()
        result = generate_slots(
            day, schedule.rules, schedule.overrides, interval_minutes=settings.SLOT_INTERVAL_MINUTES
        )
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidScheduleError as e:
        raise HTTPException(status_code=502, detail=f"Invalid schedule data: {e}")

    if x_user_id:
        try:
            result = mark_booked_slots(result, await ledger.list(x_user_id), day)
        except InvalidBookingError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except LedgerPersistenceError as e:
            raise HTTPException(status_code=503, detail=str(e))
    if selected:
        result = select_slot(result, selected)

    return SlotsResponseSchema(
        date=day,
        slots=[
            TimeSlotSchema(
                time=s.time,
                display_time=format_time_for_display(s.time),
                is_available=s.is_available,
                is_selected=s.is_selected,
            )
            for s in result
        ],
    )


@router.get("/status", response_model=StoreStatusSchema)
def status(
    date: str | None = Query(None),
    service: ScheduleService = Depends(get_schedule_service),
) -> StoreStatusSchema:
    schedule = _load_schedule(service)
    now = store_now(settings.STORE_TIMEZONE)
    try:
        day = parse_date(date).isoformat() if date else now.date().isoformat()
        result = get_status(
            day,
            schedule.rules,
            schedule.overrides,
            now=now,
            timezone=settings.STORE_TIMEZONE,
            opening_soon_minutes=settings.OPENING_SOON_MINUTES,
            closing_soon_minutes=settings.CLOSING_SOON_MINUTES,
        )
    except InvalidDateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidScheduleError as e:
        raise HTTPException(status_code=502, detail=f"Invalid schedule data: {e}")

    return StoreStatusSchema(
        date=day,
        is_open=result.is_open,
        next_opening=result.next_opening,
        next_closing=result.next_closing,
        current_status=result.current_status,
    )


@router.get("/bookings", response_model=BookingListResponseSchema)
async def list_bookings(
    x_user_id: str = Header(...),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> BookingListResponseSchema:
    try:
        bookings = await ledger.list(x_user_id)
    except InvalidBookingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return BookingListResponseSchema(bookings=[_booking_schema(b) for b in bookings])


@router.post("/bookings", response_model=BookingSchema, status_code=201)
async def create_booking(
    req: CreateBookingRequestSchema,
    x_user_id: str = Header(...),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> BookingSchema:
    # Slot availability is checked by the client against GET /slots before booking.
    try:
        booking = await ledger.create(req.date, req.time, x_user_id)
    except InvalidBookingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _booking_schema(booking)


@router.post("/bookings/{booking_id}/cancel", response_model=CancelBookingResponseSchema)
async def cancel_booking(
    booking_id: str,
    x_user_id: str = Header(...),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> CancelBookingResponseSchema:
    try:
        result = await ledger.cancel(booking_id, x_user_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidBookingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return CancelBookingResponseSchema(booking_id=result.booking_id, status=result.status)


@router.delete("/bookings", status_code=204)
async def clear_bookings(
    x_user_id: str = Header(...),
    ledger: BookingLedger = Depends(get_booking_ledger),
) -> None:
    try:
        await ledger.clear(x_user_id)
    except InvalidBookingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LedgerPersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
