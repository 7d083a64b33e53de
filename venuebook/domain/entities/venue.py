from __future__ import annotations

from dataclasses import dataclass, field

from venuebook.domain.entities.reservation import Reservation


@dataclass(frozen=True)
class Venue:
    id: str
    name: str
    price_per_night: float
    max_guests: int
    reservations: tuple[Reservation, ...] = field(default_factory=tuple)
