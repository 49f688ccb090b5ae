from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from salon_booking.application.exceptions import (
    AppointmentAlreadyOccurred,
    BookingNotFound,
    InvalidTransition,
    SlotNoLongerAvailable,
    ValidationError,
)
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.calendar_rules import CalendarRulesPort
from salon_booking.application.ports.notification_sink import NotificationSinkPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.conflict_resolver import ConflictResolver
from salon_booking.application.use_cases.slot_generator import resolve_effective_hours
from salon_booking.application.utils.time_math import day_of_week, format_date, format_time, parse_time
from salon_booking.domain.entities.booking import (
    ALLOWED_TRANSITIONS,
    Booking,
    BookingEvent,
    BookingStatus,
    BookingTransition,
    NewBooking,
    TransitionResult,
)


class BookingStateMachine:
    """
    Governs booking status changes.

    pending -> confirmed | cancelled
    confirmed -> cancelled
    cancelled is terminal.

    Creation does not check availability: pending bookings never block slots, so
    two pending bookings may target the same time until one is confirmed.
    Confirmation re-validates against the other confirmed bookings under the
    ledger's per-date lock. Rescheduling also checks the new time against the
    opening hours of the target date.
    """

    def __init__(
        self,
        ledger: BookingLedgerPort,
        catalog: ServiceCatalogPort,
        calendar_rules: CalendarRulesPort,
        resolver: ConflictResolver,
        notifier: NotificationSinkPort,
        timezone: ZoneInfo,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._calendar_rules = calendar_rules
        self._resolver = resolver
        self._notifier = notifier
        self._timezone = timezone
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    # ===== QUERIES =====

    def get(self, booking_id: int) -> Booking:
        booking = self._ledger.get(booking_id)
        if booking is None:
            raise BookingNotFound(f"Booking {booking_id} not found")
        return booking

    def list_bookings(self, target_date: date | None = None) -> list[Booking]:
        bookings = self._ledger.list_all()
        if target_date is not None:
            bookings = [b for b in bookings if b.date == target_date]
        return bookings

    def list_for_client(self, email: str) -> list[Booking]:
        normalized = email.strip().lower()
        return [b for b in self._ledger.list_all() if b.email.strip().lower() == normalized]

    # ===== COMMANDS =====

    def create(self, request: NewBooking) -> Booking:
        if self._catalog.get_service_by_name(request.service_type) is None:
            raise ValidationError(f"Unknown service '{request.service_type}'")
        parse_time(request.time)

        booking = self._ledger.add(request)
        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "status": booking.status.value,
                "date": format_date(booking.date),
                "time": format_time(booking.time),
                "service": booking.service_type,
            },
        )
        self._publish(BookingEvent(kind="created", booking=booking))
        return booking

    def change_status(self, booking_id: int, status: BookingStatus | str) -> TransitionResult:
        try:
            target = BookingStatus(status)
        except ValueError as e:
            raise InvalidTransition(f"Unknown status '{status}'") from e

        if target == BookingStatus.confirmed:
            return self.confirm(booking_id)
        if target == BookingStatus.cancelled:
            return self.cancel(booking_id)

        current = self.get(booking_id)
        raise InvalidTransition(f"Cannot move booking {booking_id} from {current.status.value} to {target.value}")

    def confirm(self, booking_id: int) -> TransitionResult:
        observed = self.get(booking_id)
        self._ensure_allowed(observed, BookingStatus.confirmed)

        with self._ledger.locked(observed.date):
            booking = self.get(booking_id)
            if booking.date != observed.date:
                raise SlotNoLongerAvailable(f"Booking {booking_id} was rescheduled during confirmation")
            self._ensure_allowed(booking, BookingStatus.confirmed)

            check = self._resolver.check(
                booking.time,
                self._resolver.booking_duration(booking),
                None,
                None,
                self._ledger.list_for_date(booking.date),
                exclude_booking_id=booking.id,
            )
            if not check.available:
                self._logger.warning(
                    "Confirmation rejected",
                    extra={
                        "booking_id": booking.id,
                        "date": format_date(booking.date),
                        "time": format_time(booking.time),
                        "reason": f"conflicts with {list(check.conflicting_booking_ids)}",
                    },
                )
                raise SlotNoLongerAvailable(
                    f"{format_date(booking.date)} {format_time(booking.time)} is no longer available",
                    conflicting_booking_ids=check.conflicting_booking_ids,
                )

            updated = self._ledger.compare_and_set_status(
                booking.id, BookingStatus.pending, BookingStatus.confirmed
            )

        if updated is None:
            raise InvalidTransition(f"Booking {booking_id} changed status concurrently")
        return self._record_transition(updated, BookingStatus.pending)

    def cancel(self, booking_id: int) -> TransitionResult:
        booking = self.get(booking_id)
        self._ensure_allowed(booking, BookingStatus.cancelled)

        if not self._is_in_future(booking.date, booking.time):
            raise AppointmentAlreadyOccurred(
                f"Booking {booking_id} at {format_date(booking.date)} {format_time(booking.time)} has already occurred"
            )

        updated = self._ledger.compare_and_set_status(booking.id, booking.status, BookingStatus.cancelled)
        if updated is None:
            raise InvalidTransition(f"Booking {booking_id} changed status concurrently")
        return self._record_transition(updated, booking.status)

    def reschedule(self, booking_id: int, new_date: date, new_time: time) -> Booking:
        new_time = parse_time(new_time)
        observed = self.get(booking_id)
        if observed.status == BookingStatus.cancelled:
            raise InvalidTransition(f"Booking {booking_id} is cancelled")
        if not self._is_in_future(observed.date, observed.time):
            raise AppointmentAlreadyOccurred(f"Booking {booking_id} has already occurred")
        if not self._is_in_future(new_date, new_time):
            raise ValidationError(f"{format_date(new_date)} {format_time(new_time)} is in the past")

        with self._ledger.locked(observed.date, new_date):
            booking = self.get(booking_id)
            if booking.status == BookingStatus.cancelled:
                raise InvalidTransition(f"Booking {booking_id} is cancelled")

            hours = resolve_effective_hours(
                new_date,
                self._calendar_rules.get_business_hours(day_of_week(new_date)),
                self._calendar_rules.get_special_date(new_date),
            )
            if hours is None:
                raise ValidationError(f"The salon is closed on {format_date(new_date)}")
            if new_time < hours.open_time:
                raise ValidationError(
                    f"{format_time(new_time)} is before opening time {format_time(hours.open_time)}"
                )

            check = self._resolver.check(
                new_time,
                self._resolver.booking_duration(booking),
                hours.close_time,
                hours.break_window,
                self._ledger.list_for_date(new_date) if booking.blocks_calendar else (),
                exclude_booking_id=booking.id,
            )
            if check.reason in ("overrun", "break"):
                raise ValidationError(
                    f"{format_date(new_date)} {format_time(new_time)} falls outside opening hours ({check.reason})"
                )
            if not check.available:
                raise SlotNoLongerAvailable(
                    f"{format_date(new_date)} {format_time(new_time)} is no longer available",
                    conflicting_booking_ids=check.conflicting_booking_ids,
                )

            moved = self._ledger.move(booking.id, booking.status, new_date, new_time)

        if moved is None:
            raise InvalidTransition(f"Booking {booking_id} changed status concurrently")

        self._logger.info(
            "Booking rescheduled",
            extra={
                "booking_id": moved.id,
                "status": moved.status.value,
                "date": format_date(moved.date),
                "time": format_time(moved.time),
            },
        )
        self._publish(BookingEvent(kind="rescheduled", booking=moved))
        return moved

    def update_deposit(self, booking_id: int, deposit_paid: bool) -> Booking:
        updated = self._ledger.set_deposit_paid(booking_id, deposit_paid)
        if updated is None:
            raise BookingNotFound(f"Booking {booking_id} not found")
        self._logger.info(
            "Deposit updated",
            extra={"booking_id": updated.id, "reason": f"deposit_paid={deposit_paid}"},
        )
        return updated

    # ===== HELPERS =====

    def _ensure_allowed(self, booking: Booking, target: BookingStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[booking.status]:
            raise InvalidTransition(
                f"Cannot move booking {booking.id} from {booking.status.value} to {target.value}"
            )

    def _is_in_future(self, target_date: date, target_time: time) -> bool:
        starts_at = datetime.combine(target_date, target_time, tzinfo=self._timezone)
        return starts_at > self._clock()

    def _record_transition(self, booking: Booking, from_status: BookingStatus) -> TransitionResult:
        transition = BookingTransition(
            booking_id=booking.id,
            from_status=from_status,
            to_status=booking.status,
            occurred_at=self._clock(),
        )
        self._logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking.id,
                "status": booking.status.value,
                "reason": f"{from_status.value}->{booking.status.value}",
            },
        )
        self._publish(BookingEvent(kind="status_changed", booking=booking, transition=transition))
        return TransitionResult(booking=booking, transition=transition)

    def _publish(self, event: BookingEvent) -> None:
        try:
            self._notifier.publish(event)
        except Exception as e:
            # The booking change is already committed
            self._logger.exception(
                "Failed to publish booking event",
                extra={"booking_id": event.booking.id, "reason": str(e)},
            )
