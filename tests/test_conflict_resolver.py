"""
Tests for overlap detection between a candidate slot, the break and confirmed bookings.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import time

import pytest

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.use_cases.conflict_resolver import intervals_overlap
from salon_booking.domain.entities.booking import Booking, BookingStatus

from conftest import MONDAY

CLOSE = time(18, 0)
LUNCH = (time(13, 0), time(14, 0))


def _booking(booking_id: int, at: time, status: BookingStatus, service: str = "Trim") -> Booking:
    return Booking(
        id=booking_id,
        name="Client",
        email="client@example.com",
        phone="5550001111",
        service_type=service,
        date=MONDAY,
        time=at,
        status=status,
    )


def test_intervals_overlap_is_half_open():
    assert intervals_overlap(0, 60, 59, 120)
    assert not intervals_overlap(0, 60, 60, 120)
    assert not intervals_overlap(60, 120, 0, 60)
    assert intervals_overlap(30, 40, 0, 120)


def test_break_exclusion(resolver):
    assert resolver.is_slot_available(time(12, 0), 60, CLOSE, LUNCH, [])
    assert not resolver.is_slot_available(time(12, 30), 60, CLOSE, LUNCH, [])
    assert resolver.is_slot_available(time(14, 0), 60, CLOSE, LUNCH, [])
    assert resolver.check(time(13, 30), 30, CLOSE, LUNCH, []).reason == "break"


def test_overrun_past_close(resolver):
    result = resolver.check(time(17, 30), 60, CLOSE, None, [])
    assert not result.available
    assert result.reason == "overrun"
    assert resolver.is_slot_available(time(17, 0), 60, CLOSE, None, [])


def test_no_close_time_skips_overrun_check(resolver):
    assert resolver.is_slot_available(time(23, 30), 60, None, None, [])


def test_back_to_back_bookings_do_not_conflict(resolver):
    existing = [_booking(1, time(10, 0), BookingStatus.confirmed)]
    assert resolver.is_slot_available(time(9, 0), 60, CLOSE, None, existing)
    assert resolver.is_slot_available(time(11, 0), 60, CLOSE, None, existing)


def test_one_minute_overlap_conflicts(resolver):
    existing = [_booking(1, time(10, 0), BookingStatus.confirmed)]
    result = resolver.check(time(9, 0), 61, CLOSE, None, existing)
    assert not result.available
    assert result.reason == "booking"
    assert result.conflicting_booking_ids == (1,)

    assert not resolver.is_slot_available(time(10, 59), 30, CLOSE, None, existing)


def test_candidate_starting_before_booking_but_running_into_it_conflicts(resolver):
    existing = [_booking(1, time(10, 0), BookingStatus.confirmed)]
    assert not resolver.is_slot_available(time(9, 30), 60, CLOSE, None, existing)


def test_only_confirmed_bookings_block(resolver):
    existing = [
        _booking(1, time(10, 0), BookingStatus.pending),
        _booking(2, time(10, 0), BookingStatus.cancelled),
    ]
    assert resolver.is_slot_available(time(10, 0), 60, CLOSE, None, existing)


def test_existing_booking_uses_its_own_service_duration(resolver):
    existing = [_booking(1, time(10, 0), BookingStatus.confirmed, service="Braids")]
    # Braids run 90 minutes: 10:00-11:30
    assert not resolver.is_slot_available(time(11, 0), 30, CLOSE, None, existing)
    assert resolver.is_slot_available(time(11, 30), 30, CLOSE, None, existing)


def test_unknown_service_falls_back_to_sixty_minutes(resolver):
    existing = [_booking(1, time(10, 0), BookingStatus.confirmed, service="Discontinued Style")]
    assert not resolver.is_slot_available(time(10, 30), 30, CLOSE, None, existing)
    assert resolver.is_slot_available(time(11, 0), 30, CLOSE, None, existing)


def test_excluded_booking_is_ignored(resolver):
    booking = _booking(1, time(10, 0), BookingStatus.confirmed)
    assert resolver.is_slot_available(time(10, 0), 60, CLOSE, None, [booking], exclude_booking_id=1)


def test_collects_every_conflicting_booking(resolver):
    first = _booking(1, time(10, 0), BookingStatus.confirmed)
    second = replace(first, id=2, time=time(11, 0))
    result = resolver.check(time(10, 30), 60, CLOSE, None, [first, second])
    assert result.conflicting_booking_ids == (1, 2)


@pytest.mark.parametrize("duration", [0, -30])
def test_non_positive_duration_is_invalid(resolver, duration):
    with pytest.raises(ValidationError):
        resolver.check(time(10, 0), duration, CLOSE, None, [])
