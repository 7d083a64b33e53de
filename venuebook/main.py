from fastapi import FastAPI

from venuebook.api.v1.bookings import router as bookings_router
from venuebook.core.config import settings
from venuebook.core.logging_config import configure_logging


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Venue Booking", version="1.0.0")

app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
