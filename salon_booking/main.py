import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from salon_booking.api.v1.availability import router as availability_router
from salon_booking.api.v1.bookings import router as bookings_router
from salon_booking.api.v1.calendar import router as calendar_router
from salon_booking.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "status", "date", "time", "service", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking Engine", version="1.0.0")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


app.include_router(availability_router, prefix="/api", tags=["availability"])
app.include_router(bookings_router, prefix="/api", tags=["bookings"])
app.include_router(calendar_router, prefix="/api", tags=["calendar"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
