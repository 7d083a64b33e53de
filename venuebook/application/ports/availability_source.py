from __future__ import annotations

from abc import ABC, abstractmethod

from venuebook.domain.entities.venue import Venue


class AvailabilitySourcePort(ABC):
    @abstractmethod
    def get_venue(self, venue_id: str) -> Venue:
        """Fetch venue details together with its existing reservations."""
        raise NotImplementedError
