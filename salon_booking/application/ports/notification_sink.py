from abc import ABC, abstractmethod

from salon_booking.domain.entities.booking import BookingEvent


class NotificationSinkPort(ABC):
    @abstractmethod
    def publish(self, event: BookingEvent) -> None:
        raise NotImplementedError
