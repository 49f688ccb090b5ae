from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, time

from salon_booking.domain.entities.booking import Booking, BookingStatus, NewBooking


class BookingLedgerPort(ABC):
    @abstractmethod
    def add(self, new_booking: NewBooking) -> Booking:
        """Insert a pending booking and return it with id and created_at set."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: int) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Booking]:
        """All bookings, newest first."""
        raise NotImplementedError

    @abstractmethod
    def list_for_date(self, target_date: date) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_status: BookingStatus,
    ) -> Booking | None:
        """
        Atomically move booking_id from `expected` to `new_status`.
        Returns the updated booking, or None if the stored status was not `expected`.
        """
        raise NotImplementedError

    @abstractmethod
    def move(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_date: date,
        new_time: time,
    ) -> Booking | None:
        """Atomically reschedule booking_id if its status is still `expected`."""
        raise NotImplementedError

    @abstractmethod
    def set_deposit_paid(self, booking_id: int, deposit_paid: bool) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def locked(self, *dates: date) -> AbstractContextManager[None]:
        """
        Mutual exclusion over the calendar of the given dates.
        Conflict re-checks and the writes they guard must run inside it.
        """
        raise NotImplementedError
