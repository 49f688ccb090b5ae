"""
Slot generation.

Resolves the effective opening hours for a date from the weekly business hours
and an optional special-date override, then walks a fixed grid of candidate
start times across them. Nothing here looks at bookings.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date, time

from salon_booking.application.exceptions import ValidationError
from salon_booking.application.utils.time_math import day_of_week, from_minutes, to_minutes
from salon_booking.domain.entities.calendar_rules import BusinessHours, EffectiveHours, SpecialDate

DEFAULT_SLOT_INTERVAL_MINUTES = 30


def _hours_for_weekday(
    business_hours: Iterable[BusinessHours] | BusinessHours | None,
    weekday: int,
) -> BusinessHours | None:
    if business_hours is None:
        return None
    if isinstance(business_hours, BusinessHours):
        return business_hours if business_hours.day_of_week == weekday else None
    for row in business_hours:
        if row.day_of_week == weekday:
            return row
    return None


def resolve_effective_hours(
    target_date: date,
    business_hours: Iterable[BusinessHours] | BusinessHours | None,
    special_date: SpecialDate | None = None,
) -> EffectiveHours | None:
    """
    Effective open/close/break for target_date, or None when the salon is closed.

    Precedence:
        1. special date closed -> closed
        2. special date open -> its open/close times, missing ones taken from the weekday
        3. weekday business hours (missing or closed row -> closed)
    """
    if special_date is not None and special_date.date != target_date:
        special_date = None

    if special_date is not None and not special_date.is_open:
        return None

    weekday_row = _hours_for_weekday(business_hours, day_of_week(target_date))
    if weekday_row is not None and not weekday_row.is_open:
        weekday_row = None

    if special_date is not None:
        open_time = special_date.open_time or (weekday_row.open_time if weekday_row else None)
        close_time = special_date.close_time or (weekday_row.close_time if weekday_row else None)
        if open_time is None or close_time is None:
            return None
        return EffectiveHours(
            open_time=open_time,
            close_time=close_time,
            break_start=weekday_row.break_start if weekday_row else None,
            break_end=weekday_row.break_end if weekday_row else None,
            source="special_date",
        )

    if weekday_row is None:
        return None

    return EffectiveHours(
        open_time=weekday_row.open_time,
        close_time=weekday_row.close_time,
        break_start=weekday_row.break_start,
        break_end=weekday_row.break_end,
        source="weekday",
    )


def iter_grid(
    open_time: time,
    close_time: time,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
) -> Iterator[time]:
    """Candidate start times from open_time, every interval_minutes, while < close_time."""
    if interval_minutes <= 0:
        raise ValidationError(f"Slot interval must be positive, got {interval_minutes}")

    current = to_minutes(open_time)
    end = to_minutes(close_time)
    while current < end:
        yield from_minutes(current)
        current += interval_minutes


def generate_slots(
    target_date: date,
    business_hours: Iterable[BusinessHours] | BusinessHours | None,
    special_date: SpecialDate | None = None,
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
) -> Iterator[time]:
    """Lazy grid of candidate start times for target_date. Empty when closed."""
    hours = resolve_effective_hours(target_date, business_hours, special_date)
    if hours is None:
        return iter(())
    return iter_grid(hours.open_time, hours.close_time, interval_minutes)
