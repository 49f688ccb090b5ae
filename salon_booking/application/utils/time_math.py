from __future__ import annotations

import re
from datetime import date, datetime, time

from salon_booking.application.exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")
_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})\s*$")


def parse_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD string. Raises ValidationError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    match = _DATE_RE.match(value or "")
    if not match:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as e:
        raise ValidationError(f"Invalid date '{value}': {e}") from e


def parse_time(value: str | time) -> time:
    """Parse an HH:MM (or HH:MM:00) string into a whole-minute time. Raises ValidationError."""
    if isinstance(value, time):
        if value.second or value.microsecond:
            raise ValidationError(f"Invalid time '{value}', expected whole minutes")
        return value
    match = _TIME_RE.match(value or "")
    if not match:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if int(match.group(3) or 0):
        raise ValidationError(f"Invalid time '{value}', expected whole minutes")
    try:
        return time(hour, minute)
    except ValueError as e:
        raise ValidationError(f"Invalid time '{value}': {e}") from e


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def to_minutes(value: time) -> int:
    """Minutes since midnight, seconds ignored."""
    return value.hour * 60 + value.minute


def from_minutes(minutes: int) -> time:
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return time(minutes // 60, minutes % 60)


def day_of_week(value: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (value.weekday() + 1) % 7
