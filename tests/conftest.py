from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

import pytest

from salon_booking.application.ports.notification_sink import NotificationSinkPort
from salon_booking.application.use_cases.booking_state_machine import BookingStateMachine
from salon_booking.application.use_cases.conflict_resolver import ConflictResolver
from salon_booking.domain.entities.booking import BookingEvent, NewBooking
from salon_booking.domain.entities.service import Service
from salon_booking.infrastructure.calendar.memory_calendar_rules import MemoryCalendarRules
from salon_booking.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.store.memory_ledger import MemoryBookingLedger

TZ = ZoneInfo("America/New_York")

# 2030-01-07 is a Monday.
MONDAY = date(2030, 1, 7)
NOW = datetime(2030, 1, 1, 8, 0, tzinfo=TZ)


class RecordingSink(NotificationSinkPort):
    def __init__(self) -> None:
        self.events: list[BookingEvent] = []

    def publish(self, event: BookingEvent) -> None:
        self.events.append(event)


class FixedClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def new_booking(service_type: str = "Trim", day: date = MONDAY, at: time = time(10, 0), **kwargs) -> NewBooking:
    return NewBooking(
        name=kwargs.get("name", "Ada Lovelace"),
        email=kwargs.get("email", "ada@example.com"),
        phone=kwargs.get("phone", "5550001111"),
        service_type=service_type,
        date=day,
        time=at,
        notes=kwargs.get("notes"),
    )


@pytest.fixture
def catalog() -> ServiceCatalogStore:
    return ServiceCatalogStore(
        [
            Service(id=1, name="Trim", duration_minutes=60),
            Service(id=2, name="Braids", duration_minutes=90),
            Service(id=3, name="Consultation", duration_minutes=30),
        ]
    )


@pytest.fixture
def resolver(catalog: ServiceCatalogStore) -> ConflictResolver:
    return ConflictResolver(catalog)


@pytest.fixture
def ledger() -> MemoryBookingLedger:
    return MemoryBookingLedger()


@pytest.fixture
def calendar_rules() -> MemoryCalendarRules:
    return MemoryCalendarRules()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def machine(ledger, catalog, calendar_rules, resolver, sink, clock) -> BookingStateMachine:
    return BookingStateMachine(
        ledger=ledger,
        catalog=catalog,
        calendar_rules=calendar_rules,
        resolver=resolver,
        notifier=sink,
        timezone=TZ,
        clock=clock,
    )
