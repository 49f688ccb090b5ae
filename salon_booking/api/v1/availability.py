from fastapi import APIRouter, Depends, HTTPException, Query

from salon_booking.api.v1.schemas import TimeSlotSchema
from salon_booking.application.exceptions import ValidationError
from salon_booking.application.use_cases.available_slots import AvailableSlotsUseCase
from salon_booking.application.utils.time_math import parse_date
from salon_booking.wiring.dependencies import get_available_slots_use_case

router = APIRouter()


@router.get("/available-slots", response_model=list[TimeSlotSchema])
def available_slots(
    date: str | None = Query(None),
    service_id: int | None = Query(None, alias="serviceId"),
    uc: AvailableSlotsUseCase = Depends(get_available_slots_use_case),
):
    if not date:
        raise HTTPException(status_code=400, detail="date is required")
    if service_id is None:
        raise HTTPException(status_code=400, detail="serviceId is required")

    try:
        slots = uc.execute(parse_date(date), service_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [TimeSlotSchema.from_entity(slot) for slot in slots]
