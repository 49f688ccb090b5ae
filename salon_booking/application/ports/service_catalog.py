from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.service import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: int) -> Service | None:
        """Get service by id."""
        raise NotImplementedError

    @abstractmethod
    def get_service_by_name(self, name: str) -> Service | None:
        """Get service by display name (Booking.service_type)."""
        raise NotImplementedError

    @abstractmethod
    def get_duration_minutes(self, name: str) -> int | None:
        """Duration for a service name, or None if it cannot be resolved."""
        raise NotImplementedError
