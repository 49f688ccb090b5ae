from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from salon_booking.core.config import settings
from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.application.ports.calendar_rules import CalendarRulesPort
from salon_booking.application.ports.notification_sink import NotificationSinkPort
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.available_slots import AvailableSlotsUseCase
from salon_booking.application.use_cases.booking_state_machine import BookingStateMachine
from salon_booking.application.use_cases.calendar_admin import CalendarAdminUseCase
from salon_booking.application.use_cases.conflict_resolver import ConflictResolver
from salon_booking.infrastructure.calendar.memory_calendar_rules import MemoryCalendarRules
from salon_booking.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from salon_booking.infrastructure.notifications.log_sink import LoggingNotificationSink
from salon_booking.infrastructure.notifications.webhook_sink import WebhookNotificationSink
from salon_booking.infrastructure.store.json_ledger import JsonBookingLedger
from salon_booking.infrastructure.store.memory_ledger import MemoryBookingLedger


_booking_ledger: BookingLedgerPort | None = None
_calendar_rules: CalendarRulesPort | None = None


def get_booking_ledger() -> BookingLedgerPort:
    global _booking_ledger
    if _booking_ledger is None:
        if settings.LEDGER_PROVIDER.lower() == "json":
            _booking_ledger = JsonBookingLedger(data_dir=settings.LEDGER_DATA_DIR)
        else:
            _booking_ledger = MemoryBookingLedger()
    return _booking_ledger


def get_calendar_rules() -> CalendarRulesPort:
    global _calendar_rules
    if _calendar_rules is None:
        _calendar_rules = MemoryCalendarRules()
    return _calendar_rules


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_notification_sink() -> NotificationSinkPort:
    if settings.NOTIFICATION_WEBHOOK_URL:
        logging.getLogger(__name__).info("Using WebhookNotificationSink")
        return WebhookNotificationSink(
            endpoint=settings.NOTIFICATION_WEBHOOK_URL,
            timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationSink()


def get_conflict_resolver() -> ConflictResolver:
    return ConflictResolver(
        catalog=get_service_catalog(),
        default_duration_minutes=settings.DEFAULT_SERVICE_DURATION_MINUTES,
    )


def get_available_slots_use_case() -> AvailableSlotsUseCase:
    return AvailableSlotsUseCase(
        calendar_rules=get_calendar_rules(),
        catalog=get_service_catalog(),
        ledger=get_booking_ledger(),
        resolver=get_conflict_resolver(),
        interval_minutes=settings.SLOT_INTERVAL_MINUTES,
    )


def get_booking_state_machine() -> BookingStateMachine:
    return BookingStateMachine(
        ledger=get_booking_ledger(),
        catalog=get_service_catalog(),
        calendar_rules=get_calendar_rules(),
        resolver=get_conflict_resolver(),
        notifier=get_notification_sink(),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
    )


def get_calendar_admin_use_case() -> CalendarAdminUseCase:
    return CalendarAdminUseCase(calendar_rules=get_calendar_rules())
