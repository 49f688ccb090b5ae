from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from salon_booking.application.utils.time_math import format_date, format_time
from salon_booking.domain.entities.booking import Booking, BookingStatus
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.time_slot import TimeSlot


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSlotSchema(CamelSchema):
    time: str
    available: bool

    @classmethod
    def from_entity(cls, slot: TimeSlot) -> "TimeSlotSchema":
        return cls(time=format_time(slot.time), available=slot.available)


class BookingCreateSchema(CamelSchema):
    name: str = Field(min_length=2)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=10)
    service_type: str = Field(min_length=1)
    date: str
    time: str
    notes: str | None = None


class BookingSchema(CamelSchema):
    id: int
    name: str
    email: str
    phone: str
    service_type: str
    date: str
    time: str
    notes: str | None = None
    status: BookingStatus
    deposit_paid: bool
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            service_type=booking.service_type,
            date=format_date(booking.date),
            time=format_time(booking.time),
            notes=booking.notes,
            status=booking.status,
            deposit_paid=booking.deposit_paid,
            created_at=booking.created_at,
        )


class StatusUpdateSchema(CamelSchema):
    status: str


class DepositUpdateSchema(CamelSchema):
    deposit_paid: bool


class RescheduleSchema(CamelSchema):
    date: str
    time: str


class ServiceSchema(CamelSchema):
    id: int
    name: str
    duration_minutes: int
    description: str | None = None
    price: int | None = None

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            duration_minutes=service.duration_minutes,
            description=service.description,
            price=service.price,
        )


class BusinessHoursSchema(CamelSchema):
    day_of_week: int
    is_open: bool
    open_time: str
    close_time: str
    break_start: str | None = None
    break_end: str | None = None

    @classmethod
    def from_entity(cls, hours: BusinessHours) -> "BusinessHoursSchema":
        return cls(
            day_of_week=hours.day_of_week,
            is_open=hours.is_open,
            open_time=format_time(hours.open_time),
            close_time=format_time(hours.close_time),
            break_start=format_time(hours.break_start) if hours.break_start else None,
            break_end=format_time(hours.break_end) if hours.break_end else None,
        )


class BusinessHoursUpdateSchema(CamelSchema):
    is_open: bool
    open_time: str
    close_time: str
    break_start: str | None = None
    break_end: str | None = None


class SpecialDateSchema(CamelSchema):
    date: str
    is_open: bool
    open_time: str | None = None
    close_time: str | None = None
    reason: str | None = None

    @classmethod
    def from_entity(cls, special_date: SpecialDate) -> "SpecialDateSchema":
        return cls(
            date=format_date(special_date.date),
            is_open=special_date.is_open,
            open_time=format_time(special_date.open_time) if special_date.open_time else None,
            close_time=format_time(special_date.close_time) if special_date.close_time else None,
            reason=special_date.reason,
        )


class SpecialDateUpdateSchema(CamelSchema):
    is_open: bool
    open_time: str | None = None
    close_time: str | None = None
    reason: str | None = None
