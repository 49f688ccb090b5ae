from __future__ import annotations

from typing import Any

from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.utils.duration_parser import parse_duration_minutes
from salon_booking.domain.entities.service import Service
from salon_booking.infrastructure.catalog.service_catalog_data import RAW_SERVICES


def service_from_raw(row: dict[str, Any]) -> Service:
    return Service(
        id=int(row["id"]),
        name=str(row["name"]),
        duration_minutes=parse_duration_minutes(row.get("duration")),
        description=row.get("description"),
        price=row.get("price"),
    )


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, services: list[Service] | None = None) -> None:
        if services is None:
            services = [service_from_raw(row) for row in RAW_SERVICES]
        self._by_id = {s.id: s for s in services}
        self._by_name = {_normalize(s.name): s for s in services}

    def list_services(self) -> list[Service]:
        return [self._by_id[i] for i in sorted(self._by_id)]

    def get_service(self, service_id: int) -> Service | None:
        return self._by_id.get(service_id)

    def get_service_by_name(self, name: str) -> Service | None:
        return self._by_name.get(_normalize(name))

    def get_duration_minutes(self, name: str) -> int | None:
        entry = self.get_service_by_name(name)
        if not entry:
            return None
        return entry.duration_minutes


def _normalize(name: str) -> str:
    return " ".join(name.lower().split())
