from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable

from venuebook.application.utils.calendar_math import as_day, expand_span
from venuebook.domain.entities.reservation import Reservation

OccupiedDaySet = frozenset[date]

logger = logging.getLogger(__name__)


def build_occupied_days(reservations: Iterable[Reservation]) -> OccupiedDaySet:
    """
    Union of every day covered by the given reservations, endpoints included.

    Reservations repeated under the same id are counted once. Callers filter
    to a single venue beforehand; guest counts play no part here.
    """
    seen_ids: set[str] = set()
    occupied: set[date] = set()
    for reservation in reservations:
        if reservation.id in seen_ids:
            logger.debug("Skipping duplicate reservation", extra={"reservation_id": reservation.id})
            continue
        seen_ids.add(reservation.id)
        occupied.update(expand_span(reservation.date_from, reservation.date_to))
    return frozenset(occupied)


def is_occupied(day: date | datetime, occupied: OccupiedDaySet) -> bool:
    return as_day(day) in occupied
