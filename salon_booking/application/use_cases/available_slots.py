from __future__ import annotations

import logging
from datetime import date

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.calendar_rules import CalendarRulesPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.conflict_resolver import ConflictResolver
from salon_booking.application.use_cases.slot_generator import (
    DEFAULT_SLOT_INTERVAL_MINUTES,
    iter_grid,
    resolve_effective_hours,
)
from salon_booking.application.utils.time_math import day_of_week, format_date
from salon_booking.domain.entities.time_slot import TimeSlot


class AvailableSlotsUseCase:
    """Read-only: computes the slot grid for one date and service. Takes no locks."""

    def __init__(
        self,
        calendar_rules: CalendarRulesPort,
        catalog: ServiceCatalogPort,
        ledger: BookingLedgerPort,
        resolver: ConflictResolver,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    ) -> None:
        self._calendar_rules = calendar_rules
        self._catalog = catalog
        self._ledger = ledger
        self._resolver = resolver
        self._interval_minutes = interval_minutes
        self._logger = logging.getLogger(__name__)

    def execute(self, target_date: date, service_id: int) -> list[TimeSlot]:
        service = self._catalog.get_service(service_id)
        if service is None:
            raise ValidationError(f"Unknown service id {service_id}")

        hours = resolve_effective_hours(
            target_date,
            self._calendar_rules.get_business_hours(day_of_week(target_date)),
            self._calendar_rules.get_special_date(target_date),
        )
        if hours is None:
            self._logger.info(
                "Salon closed",
                extra={"date": format_date(target_date), "service": service.name},
            )
            return []

        bookings = self._ledger.list_for_date(target_date)
        slots: list[TimeSlot] = []
        for candidate in iter_grid(hours.open_time, hours.close_time, self._interval_minutes):
            result = self._resolver.check(
                candidate,
                service.duration_minutes,
                hours.close_time,
                hours.break_window,
                bookings,
            )
            if result.reason == "overrun":
                break
            slots.append(TimeSlot(time=candidate, available=result.available))

        return slots
