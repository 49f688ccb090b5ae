from __future__ import annotations

import logging

from salon_booking.application.ports.notification_sink import NotificationSinkPort
from salon_booking.domain.entities.booking import BookingEvent


class LoggingNotificationSink(NotificationSinkPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def publish(self, event: BookingEvent) -> None:
        self._logger.info(
            "Booking event",
            extra={
                "booking_id": event.booking.id,
                "status": event.booking.status.value,
                "reason": event.kind,
            },
        )
