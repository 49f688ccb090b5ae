from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from dataclasses import replace
from datetime import date, datetime, time, timezone

from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.domain.entities.booking import Booking, BookingStatus, NewBooking
from salon_booking.infrastructure.store.date_locks import DateLocks


class MemoryBookingLedger(BookingLedgerPort):
    def __init__(self) -> None:
        self._bookings: dict[int, Booking] = {}
        self._next_id = 1
        self._write_lock = threading.Lock()
        self._date_locks = DateLocks()

    def add(self, new_booking: NewBooking) -> Booking:
        with self._write_lock:
            booking = Booking(
                id=self._next_id,
                name=new_booking.name,
                email=new_booking.email,
                phone=new_booking.phone,
                service_type=new_booking.service_type,
                date=new_booking.date,
                time=new_booking.time,
                notes=new_booking.notes,
                status=BookingStatus.pending,
                deposit_paid=False,
                created_at=datetime.now(timezone.utc),
            )
            self._bookings[booking.id] = booking
            self._next_id += 1
            return booking

    def get(self, booking_id: int) -> Booking | None:
        return self._bookings.get(booking_id)

    def list_all(self) -> list[Booking]:
        with self._write_lock:
            bookings = list(self._bookings.values())
        return sorted(bookings, key=lambda b: (b.created_at, b.id), reverse=True)

    def list_for_date(self, target_date: date) -> list[Booking]:
        with self._write_lock:
            return [b for b in self._bookings.values() if b.date == target_date]

    def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_status: BookingStatus,
    ) -> Booking | None:
        with self._write_lock:
            current = self._bookings.get(booking_id)
            if current is None or current.status != expected:
                return None
            updated = replace(current, status=new_status)
            self._bookings[booking_id] = updated
            return updated

    def move(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_date: date,
        new_time: time,
    ) -> Booking | None:
        with self._write_lock:
            current = self._bookings.get(booking_id)
            if current is None or current.status != expected:
                return None
            updated = replace(current, date=new_date, time=new_time)
            self._bookings[booking_id] = updated
            return updated

    def set_deposit_paid(self, booking_id: int, deposit_paid: bool) -> Booking | None:
        with self._write_lock:
            current = self._bookings.get(booking_id)
            if current is None:
                return None
            updated = replace(current, deposit_paid=deposit_paid)
            self._bookings[booking_id] = updated
            return updated

    def locked(self, *dates: date) -> AbstractContextManager[None]:
        return self._date_locks.hold(*dates)
