from __future__ import annotations

import logging
from datetime import date

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.calendar_rules import CalendarRulesPort
from salon_booking.application.utils.time_math import format_date
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate


class CalendarAdminUseCase:
    def __init__(self, calendar_rules: CalendarRulesPort) -> None:
        self._calendar_rules = calendar_rules
        self._logger = logging.getLogger(__name__)

    def list_business_hours(self) -> list[BusinessHours]:
        return self._calendar_rules.list_business_hours()

    def update_business_hours(self, hours: BusinessHours) -> BusinessHours:
        if not 0 <= hours.day_of_week <= 6:
            raise ValidationError(f"day_of_week must be 0..6, got {hours.day_of_week}")

        if (hours.break_start is None) != (hours.break_end is None):
            raise ValidationError("break_start and break_end must be given together")

        if hours.is_open:
            if hours.open_time >= hours.close_time:
                raise ValidationError("open_time must be before close_time")
            if hours.break_start is not None and hours.break_end is not None:
                if hours.break_start >= hours.break_end:
                    raise ValidationError("break_start must be before break_end")
                if hours.break_start < hours.open_time or hours.break_end > hours.close_time:
                    raise ValidationError("break must fall within opening hours")

        saved = self._calendar_rules.save_business_hours(hours)
        self._logger.info(
            "Business hours updated",
            extra={"reason": f"day_of_week={hours.day_of_week} is_open={hours.is_open}"},
        )
        return saved

    def list_special_dates(self, from_date: date | None = None) -> list[SpecialDate]:
        special_dates = self._calendar_rules.list_special_dates()
        if from_date is not None:
            special_dates = [s for s in special_dates if s.date >= from_date]
        return special_dates

    def set_special_date(self, special_date: SpecialDate) -> SpecialDate:
        if special_date.is_open and special_date.open_time and special_date.close_time:
            if special_date.open_time >= special_date.close_time:
                raise ValidationError("open_time must be before close_time")

        saved = self._calendar_rules.save_special_date(special_date)
        self._logger.info(
            "Special date set",
            extra={"date": format_date(special_date.date), "reason": special_date.reason},
        )
        return saved

    def remove_special_date(self, target_date: date) -> bool:
        removed = self._calendar_rules.delete_special_date(target_date)
        if removed:
            self._logger.info("Special date removed", extra={"date": format_date(target_date)})
        return removed
