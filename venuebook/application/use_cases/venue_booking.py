from __future__ import annotations

import logging
from dataclasses import dataclass

from venuebook.application.exceptions import BookingValidationError, ReservationSubmissionError
from venuebook.application.ports.availability_source import AvailabilitySourcePort
from venuebook.application.ports.notifier import NotificationPort
from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.application.use_cases.reservation_workflow import AbortCallback, ReservationWorkflow
from venuebook.application.utils.availability import OccupiedDaySet, build_occupied_days
from venuebook.application.utils.range_validator import (
    ValidationResult,
    normalize_guest_count,
    validate_range,
    validation_message,
)
from venuebook.domain.entities.candidate_range import CandidateRange
from venuebook.domain.entities.venue import Venue
from venuebook.domain.entities.workflow_state import AbortReason


@dataclass(frozen=True)
class RangeCheck:
    result: ValidationResult
    message: str | None
    nights: int
    total_cost: float

    @property
    def ok(self) -> bool:
        return self.result == ValidationResult.OK


class VenueBookingUseCase:
    def __init__(
        self,
        venue_id: str,
        availability_source: AvailabilitySourcePort,
        gateway: ReservationGatewayPort,
        notifier: NotificationPort | None = None,
        on_abort: AbortCallback | None = None,
        confirmation_prefix: str = "BK",
    ) -> None:
        self._venue_id = venue_id
        self._source = availability_source
        self._gateway = gateway
        self._notifier = notifier
        self._on_abort = on_abort
        self._confirmation_prefix = confirmation_prefix
        self._venue: Venue | None = None
        self._occupied: OccupiedDaySet = frozenset()
        self._logger = logging.getLogger(__name__)

    @property
    def venue(self) -> Venue:
        if self._venue is None:
            self.refresh()
        return self._venue

    @property
    def occupied(self) -> OccupiedDaySet:
        if self._venue is None:
            self.refresh()
        return self._occupied

    def refresh(self) -> OccupiedDaySet:
        """Re-fetch the venue and replace the occupancy snapshot wholesale."""
        venue = self._source.get_venue(self._venue_id)
        reservations = [r for r in venue.reservations if r.venue_id in ("", venue.id)]
        self._venue = venue
        self._occupied = build_occupied_days(reservations)
        self._logger.info(
            "Availability refreshed",
            extra={"venue_id": venue.id, "occupied_days": len(self._occupied)},
        )
        return self._occupied

    def normalize_guests(self, raw: object) -> int:
        return normalize_guest_count(raw, self.venue.max_guests)

    def check(self, candidate: CandidateRange) -> RangeCheck:
        venue = self.venue
        result = validate_range(candidate, self._occupied, venue.max_guests)
        return RangeCheck(
            result=result,
            message=validation_message(result, venue.max_guests),
            nights=candidate.nights,
            total_cost=candidate.total_cost(venue.price_per_night),
        )

    def start_workflow(self, candidate: CandidateRange, workflow_id: str | None = None) -> ReservationWorkflow:
        """Gate entry on validation, then hand back a fresh workflow in Review."""
        check = self.check(candidate)
        if not check.ok:
            if self._notifier is not None:
                self._notifier.notify("error", check.message or "Invalid booking request.")
            raise BookingValidationError(check.result, check.message or check.result.value)

        return ReservationWorkflow(
            venue=self.venue,
            candidate=candidate,
            gateway=self._gateway,
            on_success=self._handle_success,
            on_abort=self._handle_abort,
            notifier=self._notifier,
            workflow_id=workflow_id,
            confirmation_prefix=self._confirmation_prefix,
        )

    def _handle_success(self) -> None:
        try:
            self.refresh()
        except ReservationSubmissionError as e:
            # Keep the previous snapshot; the next refresh will catch up.
            self._logger.warning(
                "Availability refresh after booking failed",
                extra={"venue_id": self._venue_id, "error_category": e.category, "reason": e.message},
            )

    def _handle_abort(self, reason: AbortReason, message: str) -> None:
        self._logger.info(
            "Booking attempt ended without reservation",
            extra={"venue_id": self._venue_id, "reason": reason.value},
        )
        if self._on_abort is not None:
            self._on_abort(reason, message)
