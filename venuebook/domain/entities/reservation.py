from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Reservation:
    id: str
    venue_id: str
    date_from: date
    date_to: date
    guests: int = 1
