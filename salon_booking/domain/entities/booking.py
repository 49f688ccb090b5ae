from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


# Only confirmed bookings occupy calendar space. Pending bookings may overlap
# each other until an admin confirms one of them.
CONFIRMED_BOOKINGS_BLOCK_SLOTS = frozenset({BookingStatus.confirmed})

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.cancelled}),
    BookingStatus.cancelled: frozenset(),
}


@dataclass(frozen=True)
class Booking:
    id: int
    name: str
    email: str
    phone: str
    service_type: str
    date: date
    time: time
    status: BookingStatus = BookingStatus.pending
    notes: str | None = None
    deposit_paid: bool = False
    created_at: datetime | None = None

    @property
    def blocks_calendar(self) -> bool:
        return self.status in CONFIRMED_BOOKINGS_BLOCK_SLOTS


@dataclass(frozen=True)
class NewBooking:
    name: str
    email: str
    phone: str
    service_type: str
    date: date
    time: time
    notes: str | None = None


@dataclass(frozen=True)
class BookingTransition:
    booking_id: int
    from_status: BookingStatus
    to_status: BookingStatus
    occurred_at: datetime


@dataclass(frozen=True)
class TransitionResult:
    booking: Booking
    transition: BookingTransition


@dataclass(frozen=True)
class BookingEvent:
    kind: str  # "created" | "status_changed" | "rescheduled"
    booking: Booking
    transition: BookingTransition | None = None
