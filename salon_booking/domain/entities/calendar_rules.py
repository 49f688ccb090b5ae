from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class BusinessHours:
    day_of_week: int  # 0 = Sunday ... 6 = Saturday
    is_open: bool
    open_time: time
    close_time: time
    break_start: time | None = None
    break_end: time | None = None

    @property
    def break_window(self) -> tuple[time, time] | None:
        if self.break_start is None or self.break_end is None:
            return None
        return (self.break_start, self.break_end)


@dataclass(frozen=True)
class SpecialDate:
    date: date
    is_open: bool
    open_time: time | None = None
    close_time: time | None = None
    reason: str | None = None


@dataclass(frozen=True)
class EffectiveHours:
    open_time: time
    close_time: time
    break_start: time | None = None
    break_end: time | None = None
    source: str = "weekday"  # "weekday" | "special_date"

    @property
    def break_window(self) -> tuple[time, time] | None:
        if self.break_start is None or self.break_end is None:
            return None
        return (self.break_start, self.break_end)
