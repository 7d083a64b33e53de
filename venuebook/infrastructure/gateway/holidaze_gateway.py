from __future__ import annotations

import logging

from pydantic import ValidationError

from venuebook.application.dto.reservation_payload import ReservationPayload
from venuebook.application.dto.venue_response import BookingDTO, VenueDTO, unwrap_data
from venuebook.application.exceptions import TransportError
from venuebook.application.ports.availability_source import AvailabilitySourcePort
from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.domain.entities.reservation import Reservation
from venuebook.domain.entities.venue import Venue
from venuebook.infrastructure.gateway.holidaze_client import (
    BOOKINGS_ENDPOINT,
    NETWORK_ERROR_MESSAGE,
    HolidazeClient,
    venue_endpoint,
)


class HolidazeReservationGateway(ReservationGatewayPort):
    def __init__(self, client: HolidazeClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def create(self, payload: ReservationPayload, idempotency_key: str | None = None) -> Reservation:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        body = self._client.post(BOOKINGS_ENDPOINT, payload.to_api(), headers=headers)
        try:
            booking = BookingDTO.model_validate(unwrap_data(body))
            reservation = booking.to_entity(venue_id=payload.venue_id)
        except (ValidationError, ValueError) as e:
            self._logger.error(
                "Unexpected reservation response shape",
                extra={"error_category": "transport", "venue_id": payload.venue_id, "error": str(e)},
            )
            raise TransportError(NETWORK_ERROR_MESSAGE) from e

        self._logger.info(
            "Reservation created",
            extra={"venue_id": payload.venue_id, "reservation_id": reservation.id},
        )
        return reservation


class HolidazeAvailabilitySource(AvailabilitySourcePort):
    def __init__(self, client: HolidazeClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def get_venue(self, venue_id: str) -> Venue:
        body = self._client.get(venue_endpoint(venue_id), params={"_owner": "true", "_bookings": "true"})
        try:
            return VenueDTO.model_validate(unwrap_data(body)).to_entity()
        except (ValidationError, ValueError) as e:
            self._logger.error(
                "Unexpected venue response shape",
                extra={"error_category": "transport", "venue_id": venue_id, "error": str(e)},
            )
            raise TransportError(NETWORK_ERROR_MESSAGE) from e
