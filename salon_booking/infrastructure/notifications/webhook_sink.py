from __future__ import annotations

import logging

import httpx

from salon_booking.application.ports.notification_sink import NotificationSinkPort
from salon_booking.domain.entities.booking import BookingEvent
from salon_booking.infrastructure.notifications.event_payload import event_to_payload


class WebhookNotificationSink(NotificationSinkPort):
    """Posts booking events to the notification subsystem (email, reminders)."""

    def __init__(self, endpoint: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def publish(self, event: BookingEvent) -> None:
        resp = self._client.post(self._endpoint, json=event_to_payload(event))
        if resp.status_code >= 400:
            self._logger.error(
                "Notification webhook failed",
                extra={
                    "booking_id": event.booking.id,
                    "status": resp.status_code,
                    "reason": resp.text[:200],
                },
            )
            resp.raise_for_status()
