from __future__ import annotations

from typing import Any

from salon_booking.domain.entities.booking import BookingEvent


def event_to_payload(event: BookingEvent) -> dict[str, Any]:
    booking = event.booking
    payload: dict[str, Any] = {
        "kind": event.kind,
        "booking": {
            "id": booking.id,
            "name": booking.name,
            "email": booking.email,
            "serviceType": booking.service_type,
            "date": booking.date.isoformat(),
            "time": booking.time.strftime("%H:%M"),
            "status": booking.status.value,
        },
    }
    if event.transition is not None:
        payload["transition"] = {
            "from": event.transition.from_status.value,
            "to": event.transition.to_status.value,
            "occurredAt": event.transition.occurred_at.isoformat(),
        }
    return payload
