class InvalidScheduleError(ValueError):
    """Raised when weekly rules or overrides are malformed (bad HH:mm, out-of-range day/month)."""
    pass


class InvalidDateError(ValueError):
    """Raised when a calendar date argument is not a valid YYYY-MM-DD date."""
    pass


class InvalidBookingError(ValueError):
    """Raised when booking input (date, time, user id) is malformed."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when a booking id is not present in the user's ledger."""

    def __init__(self, booking_id: str, user_id: str) -> None:
        super().__init__(f"Booking {booking_id!r} not found for user {user_id!r}")
        self.booking_id = booking_id
        self.user_id = user_id


class LedgerPersistenceError(RuntimeError):
    """Raised when the key-value store fails or holds an unreadable booking list."""
    pass


class ScheduleFetchError(RuntimeError):
    """Raised when the schedule source fails (timeouts, network errors, bad payload)."""
    pass
