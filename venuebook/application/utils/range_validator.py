from __future__ import annotations

import math
import re
from datetime import timedelta
from enum import Enum
from typing import Any

from venuebook.application.utils.availability import OccupiedDaySet
from venuebook.application.utils.calendar_math import as_day
from venuebook.domain.entities.candidate_range import CandidateRange

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ValidationResult(str, Enum):
    OK = "ok"
    MISSING_DATES = "missing_dates"
    NO_GUESTS = "no_guests"
    GUESTS_EXCEED_CAPACITY = "guests_exceed_capacity"
    DATE_CONFLICT = "date_conflict"


def validate_range(candidate: CandidateRange, occupied: OccupiedDaySet, max_guests: int) -> ValidationResult:
    """
    Check a candidate stay against an occupancy snapshot and venue capacity.

    Only days strictly between date_from and date_to count as conflicts, so a
    stay may start on the day another one ends and end on the day another one
    starts. A single shared turnover day is therefore never reported.
    """
    if candidate.date_from is None or candidate.date_to is None:
        return ValidationResult.MISSING_DATES
    if candidate.guests <= 0:
        return ValidationResult.NO_GUESTS
    if candidate.guests > max_guests:
        return ValidationResult.GUESTS_EXCEED_CAPACITY
    if _has_interior_conflict(candidate, occupied):
        return ValidationResult.DATE_CONFLICT
    return ValidationResult.OK


def _has_interior_conflict(candidate: CandidateRange, occupied: OccupiedDaySet) -> bool:
    start = as_day(candidate.date_from)
    end = as_day(candidate.date_to)
    interior_days = (end - start).days - 1
    if interior_days <= 0:
        return False

    # Walk whichever side is smaller.
    if len(occupied) < interior_days:
        return any(start < day < end for day in occupied)
    return any(start + timedelta(days=offset) in occupied for offset in range(1, interior_days + 1))


def validation_message(result: ValidationResult, max_guests: int | None = None) -> str | None:
    """Inline message shown next to the booking action, None when bookable."""
    if result == ValidationResult.MISSING_DATES:
        return "Please select a start and end date for your stay."
    if result == ValidationResult.NO_GUESTS:
        return "Please specify at least 1 guest."
    if result == ValidationResult.GUESTS_EXCEED_CAPACITY:
        if max_guests is None:
            return "Too many guests for this venue."
        return f"This venue allows at most {max_guests} guests."
    if result == ValidationResult.DATE_CONFLICT:
        return "Your selected date range includes days that are already booked."
    return None


def normalize_guest_count(raw: Any, max_guests: int) -> int:
    """
    Clamp a raw guest input to [1, max_guests].
    Non-numeric input (and 0) falls back to 1; "3 people" reads as 3.
    """
    value = _parse_leading_int(raw) or 1
    return max(1, min(max_guests, value))


def _parse_leading_int(raw: Any) -> int | None:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))
