from __future__ import annotations

import threading
from datetime import date, time

from salon_booking.application.ports.calendar_rules import CalendarRulesPort
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate


def default_business_hours() -> list[BusinessHours]:
    """Mon-Fri 09:00-18:00 with a 13:00-14:00 break, Sat 10:00-16:00, Sun closed."""
    hours = [
        BusinessHours(
            day_of_week=day,
            is_open=True,
            open_time=time(9, 0),
            close_time=time(18, 0),
            break_start=time(13, 0),
            break_end=time(14, 0),
        )
        for day in range(1, 6)
    ]
    hours.append(BusinessHours(day_of_week=6, is_open=True, open_time=time(10, 0), close_time=time(16, 0)))
    hours.append(BusinessHours(day_of_week=0, is_open=False, open_time=time(0, 0), close_time=time(0, 0)))
    return hours


class MemoryCalendarRules(CalendarRulesPort):
    def __init__(
        self,
        business_hours: list[BusinessHours] | None = None,
        special_dates: list[SpecialDate] | None = None,
    ) -> None:
        rows = default_business_hours() if business_hours is None else business_hours
        self._hours: dict[int, BusinessHours] = {row.day_of_week: row for row in rows}
        self._special_dates: dict[date, SpecialDate] = {s.date: s for s in special_dates or []}
        self._lock = threading.Lock()

    def list_business_hours(self) -> list[BusinessHours]:
        with self._lock:
            return [self._hours[day] for day in sorted(self._hours)]

    def get_business_hours(self, day_of_week: int) -> BusinessHours | None:
        return self._hours.get(day_of_week)

    def save_business_hours(self, hours: BusinessHours) -> BusinessHours:
        with self._lock:
            self._hours[hours.day_of_week] = hours
        return hours

    def get_special_date(self, target_date: date) -> SpecialDate | None:
        return self._special_dates.get(target_date)

    def list_special_dates(self) -> list[SpecialDate]:
        with self._lock:
            return [self._special_dates[d] for d in sorted(self._special_dates)]

    def save_special_date(self, special_date: SpecialDate) -> SpecialDate:
        with self._lock:
            self._special_dates[special_date.date] = special_date
        return special_date

    def delete_special_date(self, target_date: date) -> bool:
        with self._lock:
            return self._special_dates.pop(target_date, None) is not None
