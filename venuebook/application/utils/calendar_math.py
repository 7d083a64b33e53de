from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Iterable, TypeVar

from venuebook.application.exceptions import InvalidRangeError

SECONDS_PER_DAY = 24 * 60 * 60

T = TypeVar("T")


def as_day(value: date | datetime) -> date:
    """Drop any time component, keeping the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def nights_between(start: date | datetime | None, end: date | datetime | None) -> int:
    """Number of nights between two dates. 0 if either is missing or end <= start."""
    if start is None or end is None or end <= start:
        return 0
    diff = abs((end - start).total_seconds())
    return math.ceil(diff / SECONDS_PER_DAY)


def expand_span(date_from: date | datetime, date_to: date | datetime) -> list[date]:
    """Every calendar day from date_from through date_to, both ends included."""
    first = as_day(date_from)
    last = as_day(date_to)
    if last < first:
        raise InvalidRangeError(f"date_to {last.isoformat()} is before date_from {first.isoformat()}")

    days: list[date] = []
    current = first
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def parse_api_date(value: str) -> date:
    """Parse an ISO-8601 date or date-time string (trailing Z allowed) to a calendar day."""
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def to_api_datetime(day: date) -> str:
    """Serialize a calendar day as the midnight-UTC date-time string the API expects."""
    return f"{as_day(day).isoformat()}T00:00:00.000Z"


def format_date(value: date | str | None) -> str:
    """User-facing date, e.g. 'August 15, 2024'."""
    if not value:
        return "N/A"
    day = parse_api_date(value) if isinstance(value, str) else as_day(value)
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def sort_reservations_by_date(reservations: Iterable[T], direction: str = "asc") -> list[T]:
    """
    Return a new list ordered by date_from.
    direction is "asc" (oldest first) or "desc" (newest first).
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction}")
    return sorted(reservations, key=lambda r: r.date_from, reverse=direction == "desc")
