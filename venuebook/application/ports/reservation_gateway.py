from __future__ import annotations

from abc import ABC, abstractmethod

from venuebook.application.dto.reservation_payload import ReservationPayload
from venuebook.domain.entities.reservation import Reservation


class ReservationGatewayPort(ABC):
    @abstractmethod
    def create(self, payload: ReservationPayload, idempotency_key: str | None = None) -> Reservation:
        """
        Create a reservation remotely.
        Raises GatewayError when the service rejects it and TransportError when it can't be reached.
        """
        raise NotImplementedError
