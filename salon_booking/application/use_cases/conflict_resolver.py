"""
Conflict detection between a candidate appointment and the day's calendar.

All intervals are half-open [start, end): an appointment ending exactly when
another begins does not conflict with it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import time

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.utils.duration_parser import DEFAULT_DURATION_MINUTES
from salon_booking.application.utils.time_math import to_minutes
from salon_booking.domain.entities.booking import Booking


@dataclass(frozen=True)
class ConflictCheck:
    available: bool
    reason: str | None = None  # "overrun" | "break" | "booking"
    conflicting_booking_ids: tuple[int, ...] = ()


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


class ConflictResolver:
    def __init__(
        self,
        catalog: ServiceCatalogPort,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        self._catalog = catalog
        self._default_duration_minutes = default_duration_minutes

    def booking_duration(self, booking: Booking) -> int:
        duration = self._catalog.get_duration_minutes(booking.service_type)
        if not duration or duration <= 0:
            return self._default_duration_minutes
        return duration

    def check(
        self,
        candidate_start: time,
        service_duration: int,
        close_time: time | None,
        break_window: tuple[time, time] | None,
        existing_bookings: Iterable[Booking],
        exclude_booking_id: int | None = None,
    ) -> ConflictCheck:
        """
        Decide whether [candidate_start, candidate_start + service_duration) is free.

        Algorithm:
            1. Past close_time -> "overrun" (every later grid slot overruns too)
            2. Overlaps the break window -> "break"
            3. Overlaps any confirmed booking -> "booking"
        Bookings are expected to be those on the candidate's date.
        """
        if service_duration <= 0:
            raise ValidationError(f"Service duration must be positive, got {service_duration}")

        start = to_minutes(candidate_start)
        end = start + service_duration

        if close_time is not None and end > to_minutes(close_time):
            return ConflictCheck(available=False, reason="overrun")

        if break_window is not None:
            break_start, break_end = break_window
            if intervals_overlap(start, end, to_minutes(break_start), to_minutes(break_end)):
                return ConflictCheck(available=False, reason="break")

        conflicting: list[int] = []
        for booking in existing_bookings:
            if not booking.blocks_calendar:
                continue
            if exclude_booking_id is not None and booking.id == exclude_booking_id:
                continue
            booking_start = to_minutes(booking.time)
            booking_end = booking_start + self.booking_duration(booking)
            if intervals_overlap(start, end, booking_start, booking_end):
                conflicting.append(booking.id)

        if conflicting:
            return ConflictCheck(
                available=False,
                reason="booking",
                conflicting_booking_ids=tuple(conflicting),
            )

        return ConflictCheck(available=True)

    def is_slot_available(
        self,
        candidate_start: time,
        service_duration: int,
        close_time: time | None,
        break_window: tuple[time, time] | None,
        existing_bookings: Iterable[Booking],
        exclude_booking_id: int | None = None,
    ) -> bool:
        return self.check(
            candidate_start,
            service_duration,
            close_time,
            break_window,
            existing_bookings,
            exclude_booking_id=exclude_booking_id,
        ).available
