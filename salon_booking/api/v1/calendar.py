from fastapi import APIRouter, Depends, HTTPException, Response

from salon_booking.api.v1.schemas import (
    BusinessHoursSchema,
    BusinessHoursUpdateSchema,
    ServiceSchema,
    SpecialDateSchema,
    SpecialDateUpdateSchema,
)
from salon_booking.application.exceptions import ValidationError
from salon_booking.application.ports.service_catalog import ServiceCatalogPort
from salon_booking.application.use_cases.calendar_admin import CalendarAdminUseCase
from salon_booking.application.utils.time_math import parse_date, parse_time
from salon_booking.domain.entities.calendar_rules import BusinessHours, SpecialDate
from salon_booking.wiring.dependencies import get_calendar_admin_use_case, get_service_catalog

router = APIRouter()


@router.get("/services", response_model=list[ServiceSchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    return [ServiceSchema.from_entity(s) for s in catalog.list_services()]


@router.get("/business-hours", response_model=list[BusinessHoursSchema])
def list_business_hours(uc: CalendarAdminUseCase = Depends(get_calendar_admin_use_case)):
    return [BusinessHoursSchema.from_entity(h) for h in uc.list_business_hours()]


@router.put("/business-hours/{day_of_week}", response_model=BusinessHoursSchema)
def update_business_hours(
    day_of_week: int,
    req: BusinessHoursUpdateSchema,
    uc: CalendarAdminUseCase = Depends(get_calendar_admin_use_case),
):
    try:
        hours = uc.update_business_hours(
            BusinessHours(
                day_of_week=day_of_week,
                is_open=req.is_open,
                open_time=parse_time(req.open_time),
                close_time=parse_time(req.close_time),
                break_start=parse_time(req.break_start) if req.break_start else None,
                break_end=parse_time(req.break_end) if req.break_end else None,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BusinessHoursSchema.from_entity(hours)


@router.get("/special-dates", response_model=list[SpecialDateSchema])
def list_special_dates(
    from_date: str | None = None,
    uc: CalendarAdminUseCase = Depends(get_calendar_admin_use_case),
):
    try:
        special_dates = uc.list_special_dates(parse_date(from_date) if from_date else None)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [SpecialDateSchema.from_entity(s) for s in special_dates]


@router.put("/special-dates/{date}", response_model=SpecialDateSchema)
def set_special_date(
    date: str,
    req: SpecialDateUpdateSchema,
    uc: CalendarAdminUseCase = Depends(get_calendar_admin_use_case),
):
    try:
        special_date = uc.set_special_date(
            SpecialDate(
                date=parse_date(date),
                is_open=req.is_open,
                open_time=parse_time(req.open_time) if req.open_time else None,
                close_time=parse_time(req.close_time) if req.close_time else None,
                reason=req.reason,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SpecialDateSchema.from_entity(special_date)


@router.delete("/special-dates/{date}", status_code=204)
def remove_special_date(
    date: str,
    uc: CalendarAdminUseCase = Depends(get_calendar_admin_use_case),
):
    try:
        removed = uc.remove_special_date(parse_date(date))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail="Special date not found")
    return Response(status_code=204)
