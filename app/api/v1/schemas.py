from pydantic import BaseModel, Field

from app.domain.entities.booking import BookingStatus
from app.domain.entities.store_status import StatusLabel


class TimeSlotSchema(BaseModel):
    time: str
    display_time: str
    is_available: bool
    is_selected: bool


class SlotsResponseSchema(BaseModel):
    date: str
    slots: list[TimeSlotSchema]


class StoreStatusSchema(BaseModel):
    date: str
    is_open: bool
    next_opening: str | None = None
    next_closing: str | None = None
    current_status: StatusLabel


class DatesResponseSchema(BaseModel):
    dates: list[str]


class StoreInfoSchema(BaseModel):
    name: str
    timezone: str
    greeting: str
    now: str


class CreateBookingRequestSchema(BaseModel):
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(pattern=r"^\d{2}:\d{2}$")


class BookingSchema(BaseModel):
    id: str
    date: str
    time: str
    display_date: str
    display_time: str
    status: BookingStatus
    created_at: str
    user_id: str


class BookingListResponseSchema(BaseModel):
    bookings: list[BookingSchema]


class CancelBookingResponseSchema(BaseModel):
    booking_id: str
    status: BookingStatus


class ScheduleRefreshResponseSchema(BaseModel):
    rule_count: int
    override_count: int
