from __future__ import annotations

from datetime import date, time

import pytest

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.use_cases.calendar_admin import CalendarAdminUseCase
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate
from salon_booking.infrastructure.calendar.memory_calendar_rules import MemoryCalendarRules


@pytest.fixture
def admin() -> CalendarAdminUseCase:
    return CalendarAdminUseCase(MemoryCalendarRules())


def test_default_week(admin):
    hours = admin.list_business_hours()
    assert [h.day_of_week for h in hours] == [0, 1, 2, 3, 4, 5, 6]
    assert hours[0].is_open is False
    assert hours[1].break_window == (time(13, 0), time(14, 0))
    assert (hours[6].open_time, hours[6].close_time) == (time(10, 0), time(16, 0))


def test_update_business_hours(admin):
    saved = admin.update_business_hours(
        BusinessHours(day_of_week=0, is_open=True, open_time=time(11, 0), close_time=time(15, 0))
    )
    assert saved.is_open
    assert admin.list_business_hours()[0].open_time == time(11, 0)


@pytest.mark.parametrize(
    "hours",
    [
        BusinessHours(day_of_week=7, is_open=True, open_time=time(9, 0), close_time=time(17, 0)),
        BusinessHours(day_of_week=1, is_open=True, open_time=time(17, 0), close_time=time(9, 0)),
        BusinessHours(day_of_week=1, is_open=True, open_time=time(9, 0), close_time=time(17, 0), break_start=time(12, 0)),
        BusinessHours(
            day_of_week=1,
            is_open=True,
            open_time=time(9, 0),
            close_time=time(17, 0),
            break_start=time(16, 0),
            break_end=time(18, 0),
        ),
    ],
)
def test_update_business_hours_rejects_invalid_rows(admin, hours):
    with pytest.raises(ValidationError):
        admin.update_business_hours(hours)


def test_special_dates_lifecycle(admin):
    admin.set_special_date(SpecialDate(date=date(2030, 12, 25), is_open=False, reason="Christmas"))
    admin.set_special_date(SpecialDate(date=date(2030, 1, 1), is_open=False, reason="New Year"))

    assert [s.date for s in admin.list_special_dates()] == [date(2030, 1, 1), date(2030, 12, 25)]
    assert [s.date for s in admin.list_special_dates(date(2030, 6, 1))] == [date(2030, 12, 25)]

    assert admin.remove_special_date(date(2030, 1, 1)) is True
    assert admin.remove_special_date(date(2030, 1, 1)) is False


def test_special_date_with_inverted_hours_is_rejected(admin):
    with pytest.raises(ValidationError):
        admin.set_special_date(
            SpecialDate(date=date(2030, 3, 1), is_open=True, open_time=time(15, 0), close_time=time(10, 0))
        )
