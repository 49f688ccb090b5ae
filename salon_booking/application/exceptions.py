class BookingEngineError(Exception):
    """Base class for domain errors raised by the booking engine."""
    pass


class ValidationError(BookingEngineError, ValueError):
    """Raised on malformed input (bad date, unknown service, non-positive duration)."""
    pass


class BookingNotFound(BookingEngineError):
    """Raised when a booking id does not exist in the ledger."""
    pass


class SlotNoLongerAvailable(BookingEngineError):
    """Raised when re-validation at confirmation time finds a conflicting confirmed booking."""

    def __init__(self, message: str, conflicting_booking_ids: tuple[int, ...] = ()) -> None:
        super().__init__(message)
        self.conflicting_booking_ids = conflicting_booking_ids


class InvalidTransition(BookingEngineError):
    """Raised on an illegal booking status change."""
    pass


class AppointmentAlreadyOccurred(BookingEngineError):
    """Raised when cancelling an appointment whose start is not in the future."""
    pass
