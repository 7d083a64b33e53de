from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from venuebook.application.utils.calendar_math import parse_api_date
from venuebook.domain.entities.reservation import Reservation
from venuebook.domain.entities.venue import Venue


class BookingDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    date_from: str = Field(alias="dateFrom")
    date_to: str = Field(alias="dateTo")
    guests: int = 1
    venue_id: str | None = Field(default=None, alias="venueId")

    def to_entity(self, venue_id: str | None = None) -> Reservation:
        return Reservation(
            id=self.id,
            venue_id=str(venue_id or self.venue_id or ""),
            date_from=parse_api_date(self.date_from),
            date_to=parse_api_date(self.date_to),
            guests=self.guests,
        )


class VenueDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    price: float = 0
    max_guests: int = Field(default=1, alias="maxGuests")
    bookings: list[BookingDTO] = Field(default_factory=list)

    def to_entity(self) -> Venue:
        # Embedded bookings don't carry the venue id.
        return Venue(
            id=self.id,
            name=self.name,
            price_per_night=self.price,
            max_guests=self.max_guests,
            reservations=tuple(b.to_entity(venue_id=self.id) for b in self.bookings),
        )


def unwrap_data(body: Any) -> dict[str, Any]:
    """The API wraps single resources as {"data": {...}, "meta": {...}}."""
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    if isinstance(body, dict):
        return body
    raise ValueError("Expected a JSON object in API response")
