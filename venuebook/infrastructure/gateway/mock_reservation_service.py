from __future__ import annotations

import logging
from datetime import date

from venuebook.application.dto.reservation_payload import ReservationPayload
from venuebook.application.exceptions import GatewayError
from venuebook.application.ports.availability_source import AvailabilitySourcePort
from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.application.utils.calendar_math import parse_api_date
from venuebook.domain.entities.reservation import Reservation
from venuebook.domain.entities.venue import Venue

CONFLICT_MESSAGE = "The selected dates are no longer available."


class MockReservationService(ReservationGatewayPort, AvailabilitySourcePort):
    """
    In-memory stand-in for the remote venue API.

    Performs its own authoritative overlap check on create (stays may share a
    turnover day) and collapses retries that reuse an idempotency key.
    """

    def __init__(self, venues: list[Venue] | None = None) -> None:
        self._venues: dict[str, Venue] = {}
        self._reservations: dict[str, list[Reservation]] = {}
        self._by_idempotency_key: dict[str, Reservation] = {}
        self._counter = 0
        self._logger = logging.getLogger(__name__)
        for venue in venues or []:
            self.add_venue(venue)

    def add_venue(self, venue: Venue) -> None:
        self._venues[venue.id] = venue
        self._reservations[venue.id] = [
            r if r.venue_id else Reservation(r.id, venue.id, r.date_from, r.date_to, r.guests)
            for r in venue.reservations
        ]

    def get_venue(self, venue_id: str) -> Venue:
        venue = self._venues.get(venue_id)
        if venue is None:
            raise GatewayError("No venue with such ID", status_code=404)
        return Venue(
            id=venue.id,
            name=venue.name,
            price_per_night=venue.price_per_night,
            max_guests=venue.max_guests,
            reservations=tuple(self._reservations[venue_id]),
        )

    def create(self, payload: ReservationPayload, idempotency_key: str | None = None) -> Reservation:
        if idempotency_key and idempotency_key in self._by_idempotency_key:
            self._logger.info("Mock reservation replayed", extra={"venue_id": payload.venue_id})
            return self._by_idempotency_key[idempotency_key]

        venue = self._venues.get(payload.venue_id)
        if venue is None:
            raise GatewayError("No venue with such ID", status_code=404)
        if payload.guests > venue.max_guests:
            raise GatewayError(f"Guests cannot exceed {venue.max_guests}", status_code=400)

        date_from = parse_api_date(payload.date_from)
        date_to = parse_api_date(payload.date_to)
        if date_to <= date_from:
            raise GatewayError("dateTo must be after dateFrom", status_code=400)
        for existing in self._reservations[venue.id]:
            if _overlaps(date_from, date_to, existing.date_from, existing.date_to):
                raise GatewayError(CONFLICT_MESSAGE, status_code=409)

        self._counter += 1
        reservation = Reservation(
            id=f"mock_booking_{self._counter}",
            venue_id=venue.id,
            date_from=date_from,
            date_to=date_to,
            guests=payload.guests,
        )
        self._reservations[venue.id].append(reservation)
        if idempotency_key:
            self._by_idempotency_key[idempotency_key] = reservation
        self._logger.info(
            "Mock reservation created",
            extra={"venue_id": venue.id, "reservation_id": reservation.id},
        )
        return reservation


def _overlaps(start: date, end: date, other_start: date, other_end: date) -> bool:
    # Half-open nights: checking out on the day another stay checks in is fine.
    return start < other_end and other_start < end
