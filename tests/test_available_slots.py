"""
End-to-end slot computation over calendar rules, catalog and ledger.
"""

from __future__ import annotations

from datetime import time

import pytest

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.use_cases.available_slots import AvailableSlotsUseCase
from salon_booking.domain.entities.booking import BookingStatus
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate
from salon_booking.infrastructure.calendar.memory_calendar_rules import MemoryCalendarRules

from conftest import MONDAY, new_booking


@pytest.fixture
def morning_rules() -> MemoryCalendarRules:
    return MemoryCalendarRules(
        business_hours=[BusinessHours(day_of_week=1, is_open=True, open_time=time(9, 0), close_time=time(12, 0))]
    )


@pytest.fixture
def use_case(morning_rules, catalog, ledger, resolver) -> AvailableSlotsUseCase:
    return AvailableSlotsUseCase(morning_rules, catalog, ledger, resolver)


def _available(slots) -> list[time]:
    return [s.time for s in slots if s.available]


def test_empty_morning_offers_every_slot_that_fits(use_case):
    slots = use_case.execute(MONDAY, service_id=1)

    assert _available(slots) == [time(9, 0), time(9, 30), time(10, 0), time(10, 30), time(11, 0)]
    # 11:30 would end at 12:30 and is not emitted
    assert time(11, 30) not in [s.time for s in slots]


def test_confirmed_booking_blocks_overlapping_slots(use_case, ledger):
    booking = ledger.add(new_booking(at=time(10, 0)))
    ledger.compare_and_set_status(booking.id, BookingStatus.pending, BookingStatus.confirmed)

    slots = {s.time: s.available for s in use_case.execute(MONDAY, service_id=1)}

    assert slots[time(9, 0)] is True
    assert slots[time(9, 30)] is False
    assert slots[time(10, 0)] is False
    assert slots[time(10, 30)] is False
    assert slots[time(11, 0)] is True


def test_pending_booking_does_not_block(use_case, ledger):
    ledger.add(new_booking(at=time(10, 0)))
    assert len(_available(use_case.execute(MONDAY, service_id=1))) == 5


def test_closed_special_date_returns_no_slots(use_case, morning_rules):
    morning_rules.save_special_date(SpecialDate(date=MONDAY, is_open=False, reason="Holiday"))
    assert use_case.execute(MONDAY, service_id=1) == []


def test_break_slots_are_reported_unavailable(catalog, ledger, resolver):
    rules = MemoryCalendarRules()
    use_case = AvailableSlotsUseCase(rules, catalog, ledger, resolver)

    slots = {s.time: s.available for s in use_case.execute(MONDAY, service_id=1)}

    assert slots[time(12, 0)] is True
    assert slots[time(12, 30)] is False
    assert slots[time(13, 0)] is False
    assert slots[time(13, 30)] is False
    assert slots[time(14, 0)] is True
    assert max(slots) == time(17, 0)


def test_longer_service_stops_grid_earlier(use_case):
    slots = use_case.execute(MONDAY, service_id=2)
    assert [s.time for s in slots] == [time(9, 0), time(9, 30), time(10, 0), time(10, 30)]


def test_unknown_service_is_a_validation_error(use_case):
    with pytest.raises(ValidationError):
        use_case.execute(MONDAY, service_id=999)


def test_slot_computation_does_not_mutate_ledger(use_case, ledger):
    booking = ledger.add(new_booking(at=time(10, 0)))
    use_case.execute(MONDAY, service_id=1)
    assert ledger.get(booking.id) == booking
