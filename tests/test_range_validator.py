from __future__ import annotations

from datetime import date, datetime

import pytest

from venuebook.application.utils.range_validator import (
    ValidationResult,
    normalize_guest_count,
    validate_range,
    validation_message,
)
from venuebook.domain.entities.candidate_range import CandidateRange

JAN = lambda day: date(2025, 1, day)  # noqa: E731


def test_conflict_strictly_inside():
    occupied = frozenset({JAN(2)})
    result = validate_range(CandidateRange(JAN(1), JAN(3), 2), occupied, 4)
    assert result == ValidationResult.DATE_CONFLICT


def test_turnover_on_candidate_end_is_ok():
    occupied = frozenset({JAN(2)})
    assert validate_range(CandidateRange(JAN(1), JAN(2), 2), occupied, 4) == ValidationResult.OK


def test_turnover_on_candidate_start_is_ok():
    occupied = frozenset({JAN(2)})
    assert validate_range(CandidateRange(JAN(2), JAN(4), 2), occupied, 4) == ValidationResult.OK


def test_single_shared_turnover_day_is_not_flagged():
    """Both endpoints of the candidate are occupied but nothing lies between them."""
    occupied = frozenset({JAN(5), JAN(6)})
    assert validate_range(CandidateRange(JAN(5), JAN(6), 1), occupied, 4) == ValidationResult.OK


def test_long_range_against_small_snapshot():
    occupied = frozenset({date(2025, 6, 15)})
    candidate = CandidateRange(date(2025, 1, 1), date(2025, 12, 31), 1)
    assert validate_range(candidate, occupied, 4) == ValidationResult.DATE_CONFLICT


def test_short_range_against_large_snapshot():
    occupied = frozenset(date.fromordinal(date(2025, 1, 1).toordinal() + i) for i in range(200) if i != 100)
    start = date.fromordinal(date(2025, 1, 1).toordinal() + 99)
    end = date.fromordinal(start.toordinal() + 2)
    assert validate_range(CandidateRange(start, end, 1), occupied, 4) == ValidationResult.OK


@pytest.mark.parametrize(
    "candidate",
    [
        CandidateRange(None, JAN(3), 1),
        CandidateRange(JAN(1), None, 1),
        CandidateRange(None, None, 1),
    ],
)
def test_missing_dates(candidate):
    assert validate_range(candidate, frozenset(), 4) == ValidationResult.MISSING_DATES


def test_no_guests():
    assert validate_range(CandidateRange(JAN(1), JAN(3), 0), frozenset(), 4) == ValidationResult.NO_GUESTS


def test_guests_exceed_capacity():
    result = validate_range(CandidateRange(JAN(1), JAN(3), 5), frozenset(), 4)
    assert result == ValidationResult.GUESTS_EXCEED_CAPACITY


def test_missing_dates_checked_before_guests():
    assert validate_range(CandidateRange(None, None, 0), frozenset(), 4) == ValidationResult.MISSING_DATES


@pytest.mark.parametrize(
    "raw,expected",
    [
        (0, 1),
        (99, 5),
        (3, 3),
        (-2, 1),
        ("4", 4),
        ("abc", 1),
        ("", 1),
        (None, 1),
        ("2 guests", 2),
        (2.7, 2),
    ],
)
def test_normalize_guest_count(raw, expected):
    assert normalize_guest_count(raw, 5) == expected


def test_validation_messages():
    assert validation_message(ValidationResult.OK) is None
    assert "already booked" in validation_message(ValidationResult.DATE_CONFLICT)
    assert validation_message(ValidationResult.GUESTS_EXCEED_CAPACITY, 4) == "This venue allows at most 4 guests."


def test_candidate_derived_fields():
    candidate = CandidateRange(JAN(1), JAN(4), 2)
    assert candidate.nights == 3
    assert candidate.total_cost(120.0) == 360.0
    assert CandidateRange(JAN(4), JAN(1), 2).nights == 0
    assert CandidateRange(None, JAN(1), 2).total_cost(100.0) == 0


def test_partial_day_rounds_up_to_a_night():
    candidate = CandidateRange(datetime(2025, 1, 1, 0, 0), datetime(2025, 1, 3, 6, 0), 1)
    assert candidate.nights == 3
