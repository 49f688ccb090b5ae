"""
Concurrent confirmations of overlapping bookings must never both succeed.
"""

from __future__ import annotations

import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import time

import pytest

from salon_booking.application.exceptions import SlotNoLongerAvailable
from salon_booking.application.use_cases.booking_state_machine import BookingStateMachine
from salon_booking.domain.entities.booking import BookingStatus
from salon_booking.infrastructure.store.json_ledger import JsonBookingLedger

from conftest import TZ, new_booking


def _race(machine: BookingStateMachine, booking_ids: list[int]) -> tuple[int, int]:
    barrier = threading.Barrier(len(booking_ids))

    def attempt(booking_id: int) -> bool:
        barrier.wait()
        try:
            machine.confirm(booking_id)
            return True
        except SlotNoLongerAvailable:
            return False

    with ThreadPoolExecutor(max_workers=len(booking_ids)) as pool:
        outcomes = list(pool.map(attempt, booking_ids))
    return outcomes.count(True), outcomes.count(False)


def test_only_one_overlapping_confirmation_wins(machine, ledger):
    ids = [machine.create(new_booking(at=time(10, minute))).id for minute in (0, 15, 30, 45)]

    succeeded, rejected = _race(machine, ids)

    assert (succeeded, rejected) == (1, 3)
    statuses = [ledger.get(i).status for i in ids]
    assert statuses.count(BookingStatus.confirmed) == 1
    assert statuses.count(BookingStatus.pending) == 3


def test_non_overlapping_confirmations_all_succeed(machine):
    ids = [machine.create(new_booking(at=time(hour, 0))).id for hour in (9, 10, 11, 14)]
    assert _race(machine, ids) == (4, 0)


@pytest.mark.parametrize("attempts", [2, 6])
def test_json_ledger_serializes_confirmations(catalog, calendar_rules, resolver, sink, clock, attempts):
    with tempfile.TemporaryDirectory() as tmpdir:
        ledger = JsonBookingLedger(data_dir=tmpdir)
        machine = BookingStateMachine(ledger, catalog, calendar_rules, resolver, sink, TZ, clock)
        ids = [machine.create(new_booking()).id for _ in range(attempts)]

        assert _race(machine, ids) == (1, attempts - 1)
