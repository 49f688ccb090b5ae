from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import (
    BookingCreateSchema,
    BookingSchema,
    DepositUpdateSchema,
    RescheduleSchema,
    StatusUpdateSchema,
)
from salon_booking.application.exceptions import (
    AppointmentAlreadyOccurred,
    BookingEngineError,
    BookingNotFound,
    InvalidTransition,
    SlotNoLongerAvailable,
    ValidationError,
)
from salon_booking.application.use_cases.booking_state_machine import BookingStateMachine
from salon_booking.application.utils.time_math import parse_date, parse_time
from salon_booking.domain.entities.booking import BookingStatus, NewBooking
from salon_booking.wiring.dependencies import get_booking_state_machine

router = APIRouter()


def _http_error(e: BookingEngineError) -> HTTPException:
    if isinstance(e, BookingNotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, SlotNoLongerAvailable):
        return HTTPException(
            status_code=409,
            detail={"message": str(e), "conflictingBookingIds": list(e.conflicting_booking_ids)},
        )
    if isinstance(e, (ValidationError, InvalidTransition, AppointmentAlreadyOccurred)):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.post("/bookings", response_model=BookingSchema, status_code=201)
def create_booking(
    req: BookingCreateSchema,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        booking = uc.create(
            NewBooking(
                name=req.name.strip(),
                email=req.email.strip(),
                phone=req.phone.strip(),
                service_type=req.service_type.strip(),
                date=parse_date(req.date),
                time=parse_time(req.time),
                notes=req.notes,
            )
        )
    except BookingEngineError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(booking)


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(
    date: str | None = Query(None),
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        bookings = uc.list_bookings(parse_date(date) if date else None)
    except BookingEngineError as e:
        raise _http_error(e)
    return [BookingSchema.from_entity(b) for b in bookings]


@router.get("/client/bookings", response_model=list[BookingSchema])
def list_client_bookings(
    email: str = Query(..., min_length=3),
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    return [BookingSchema.from_entity(b) for b in uc.list_for_client(email)]


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: int,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        return BookingSchema.from_entity(uc.get(booking_id))
    except BookingEngineError as e:
        raise _http_error(e)


@router.patch("/bookings/{booking_id}/status", response_model=BookingSchema)
def update_booking_status(
    booking_id: int,
    req: StatusUpdateSchema,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        result = uc.change_status(booking_id, req.status)
    except BookingEngineError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(result.booking)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    booking_id: int,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        result = uc.change_status(booking_id, BookingStatus.cancelled)
    except BookingEngineError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(result.booking)


@router.patch("/bookings/{booking_id}/schedule", response_model=BookingSchema)
def reschedule_booking(
    booking_id: int,
    req: RescheduleSchema,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        booking = uc.reschedule(booking_id, parse_date(req.date), parse_time(req.time))
    except BookingEngineError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(booking)


@router.patch("/bookings/{booking_id}/deposit", response_model=BookingSchema)
def update_booking_deposit(
    booking_id: int,
    req: DepositUpdateSchema,
    uc: BookingStateMachine = Depends(get_booking_state_machine),
):
    try:
        booking = uc.update_deposit(booking_id, req.deposit_paid)
    except BookingEngineError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(booking)
