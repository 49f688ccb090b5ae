from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate


class CalendarRulesPort(ABC):
    @abstractmethod
    def list_business_hours(self) -> list[BusinessHours]:
        """All weekday rows, ordered by day_of_week."""
        raise NotImplementedError

    @abstractmethod
    def get_business_hours(self, day_of_week: int) -> BusinessHours | None:
        raise NotImplementedError

    @abstractmethod
    def save_business_hours(self, hours: BusinessHours) -> BusinessHours:
        """Insert or replace the row for hours.day_of_week."""
        raise NotImplementedError

    @abstractmethod
    def get_special_date(self, target_date: date) -> SpecialDate | None:
        raise NotImplementedError

    @abstractmethod
    def list_special_dates(self) -> list[SpecialDate]:
        raise NotImplementedError

    @abstractmethod
    def save_special_date(self, special_date: SpecialDate) -> SpecialDate:
        """Insert or replace the override for special_date.date."""
        raise NotImplementedError

    @abstractmethod
    def delete_special_date(self, target_date: date) -> bool:
        """Returns True if an override was removed."""
        raise NotImplementedError
