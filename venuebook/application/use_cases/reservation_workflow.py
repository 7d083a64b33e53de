from __future__ import annotations

import logging
import random
import string
import threading
import uuid
from dataclasses import replace
from typing import Callable

from venuebook.application.dto.reservation_payload import ReservationPayload
from venuebook.application.exceptions import ReservationSubmissionError, WorkflowTransitionError
from venuebook.application.ports.notifier import NotificationPort
from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.application.utils.calendar_math import format_date
from venuebook.domain.entities.candidate_range import CandidateRange
from venuebook.domain.entities.venue import Venue
from venuebook.domain.entities.workflow_state import (
    AbortReason,
    BookingSummary,
    PaymentMethod,
    WorkflowStage,
    WorkflowState,
)

SuccessCallback = Callable[[], None]
AbortCallback = Callable[[AbortReason, str], None]

CONFIRMATION_ALPHABET = string.ascii_uppercase + string.digits
DEFAULT_FAILURE_MESSAGE = "Booking failed. Please try again."
CANCELLED_MESSAGE = "Booking process canceled. Please restart to reserve your stay"
SUCCESS_MESSAGE = "Booking successful!"

ALLOWED_ACTIONS: dict[WorkflowStage, frozenset[str]] = {
    WorkflowStage.REVIEW: frozenset({"confirm", "cancel", "close"}),
    WorkflowStage.PAYMENT_SELECTION: frozenset({"select_payment", "back", "pay", "cancel", "close"}),
    WorkflowStage.SUBMITTING: frozenset(),
    WorkflowStage.CONFIRMED: frozenset({"close"}),
    WorkflowStage.ABORTED: frozenset({"close"}),
}


def generate_confirmation_id(prefix: str = "BK") -> str:
    """Short display reference such as BK-7G2KX9Q. Not unique, not for reconciliation."""
    return f"{prefix}-" + "".join(random.choices(CONFIRMATION_ALPHABET, k=7))


class ReservationWorkflow:
    """
    Review -> PaymentSelection -> Submitting -> Confirmed | Aborted.

    The caller validates the candidate range before creating the workflow.
    The gateway is called at most once per instance; while that call is
    outstanding every action is rejected. A failed submission tears the
    workflow down, a new booking attempt needs a new instance.
    """

    def __init__(
        self,
        venue: Venue,
        candidate: CandidateRange,
        gateway: ReservationGatewayPort,
        on_success: SuccessCallback | None = None,
        on_abort: AbortCallback | None = None,
        notifier: NotificationPort | None = None,
        workflow_id: str | None = None,
        confirmation_prefix: str = "BK",
    ) -> None:
        if candidate.date_from is None or candidate.date_to is None:
            raise ValueError("A reservation workflow needs both dates")
        if candidate.guests <= 0:
            raise ValueError("A reservation workflow needs at least one guest")

        self.id = workflow_id or uuid.uuid4().hex
        self.venue = venue
        self._gateway = gateway
        self._on_success = on_success
        self._on_abort = on_abort
        self._notifier = notifier
        self._confirmation_prefix = confirmation_prefix
        self._idempotency_key = str(uuid.uuid4())
        self._state = WorkflowState(stage=WorkflowStage.REVIEW, candidate=candidate)
        self._in_flight = False
        self._submitted = False
        self._success_reported = False
        self._abort_reported = False
        # Guards every check-then-set on stage and flags; never held across the gateway call or callbacks.
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def stage(self) -> WorkflowStage:
        return self._state.stage

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def available_actions(self) -> frozenset[str]:
        with self._lock:
            if self._in_flight:
                return frozenset()
            return ALLOWED_ACTIONS[self._state.stage]

    def confirm(self) -> WorkflowState:
        with self._lock:
            self._require("confirm")
            self._move_to(WorkflowStage.PAYMENT_SELECTION)
            return self._state

    def back(self) -> WorkflowState:
        with self._lock:
            self._require("back")
            self._move_to(WorkflowStage.REVIEW)
            return self._state

    def select_payment(self, method: PaymentMethod | str) -> WorkflowState:
        with self._lock:
            self._require("select_payment")
            self._state = replace(self._state, payment_method=PaymentMethod(method))
            return self._state

    def cancel(self) -> WorkflowState:
        with self._lock:
            self._require("cancel")
            first = self._teardown(AbortReason.CANCELLED, CANCELLED_MESSAGE)
        self._report_abort(AbortReason.CANCELLED, CANCELLED_MESSAGE, first)
        return self._state

    def pay(self) -> WorkflowState:
        with self._lock:
            self._require("pay")
            if self._submitted:
                raise WorkflowTransitionError("Reservation was already submitted for this workflow")
            payload = ReservationPayload.from_candidate(self._state.candidate, venue_id=self.venue.id)
            self._submitted = True
            self._in_flight = True
            self._move_to(WorkflowStage.SUBMITTING)

        try:
            reservation = self._gateway.create(payload, idempotency_key=self._idempotency_key)
        except ReservationSubmissionError as e:
            self._logger.warning(
                "Reservation submission failed",
                extra={
                    "workflow_id": self.id,
                    "venue_id": self.venue.id,
                    "error_category": e.category,
                    "status": getattr(e, "status_code", None),
                    "reason": e.message,
                },
            )
            return self._fail_submission(e.message or DEFAULT_FAILURE_MESSAGE)
        except Exception as e:
            self._logger.exception(
                "Unexpected error while submitting reservation",
                extra={"workflow_id": self.id, "venue_id": self.venue.id, "error_category": "unexpected"},
            )
            return self._fail_submission(str(e) or DEFAULT_FAILURE_MESSAGE)

        with self._lock:
            self._in_flight = False
            self._state = replace(
                self._state,
                stage=WorkflowStage.CONFIRMED,
                confirmation_id=generate_confirmation_id(self._confirmation_prefix),
                reservation_id=reservation.id,
            )
        self._logger.info(
            "Reservation confirmed",
            extra={
                "workflow_id": self.id,
                "venue_id": self.venue.id,
                "reservation_id": reservation.id,
                "stage": WorkflowStage.CONFIRMED.value,
            },
        )
        self._notify("success", SUCCESS_MESSAGE)
        return self._state

    def close(self) -> WorkflowState:
        """
        Close from any non-submitting stage.
        Review/PaymentSelection cancel the attempt; Confirmed reports success to the caller once.
        """
        report_success = False
        first_abort = False
        with self._lock:
            self._require("close")
            if self._state.stage in (WorkflowStage.REVIEW, WorkflowStage.PAYMENT_SELECTION):
                first_abort = self._teardown(AbortReason.CANCELLED, CANCELLED_MESSAGE)
            elif self._state.stage == WorkflowStage.CONFIRMED and not self._success_reported:
                self._success_reported = True
                report_success = True

        if first_abort:
            self._report_abort(AbortReason.CANCELLED, CANCELLED_MESSAGE, first_abort)
        if report_success and self._on_success is not None:
            self._on_success()
        return self._state

    def summary(self) -> BookingSummary | None:
        candidate = self._state.candidate
        if candidate is None:
            return None
        return BookingSummary(
            venue_name=self.venue.name,
            date_from=format_date(candidate.date_from),
            date_to=format_date(candidate.date_to),
            guests=candidate.guests,
            nights=candidate.nights,
            total_cost=candidate.total_cost(self.venue.price_per_night),
            payment_method=self._state.payment_method,
            confirmation_id=self._state.confirmation_id,
        )

    def _require(self, action: str) -> None:
        if self._in_flight:
            raise WorkflowTransitionError(f"Cannot {action} while the reservation is being submitted")
        if action not in ALLOWED_ACTIONS[self._state.stage]:
            raise WorkflowTransitionError(f"Cannot {action} from stage {self._state.stage.value}")

    def _move_to(self, stage: WorkflowStage) -> None:
        self._logger.debug(
            "Workflow stage change",
            extra={"workflow_id": self.id, "stage": stage.value, "previous_stage": self._state.stage.value},
        )
        self._state = replace(self._state, stage=stage)

    def _fail_submission(self, message: str) -> WorkflowState:
        with self._lock:
            self._in_flight = False
            first = self._teardown(AbortReason.SUBMISSION_FAILED, message)
        self._report_abort(AbortReason.SUBMISSION_FAILED, message, first)
        return self._state

    def _teardown(self, reason: AbortReason, message: str) -> bool:
        """Drop the draft and payment choice. Caller holds the lock. True on the first abort."""
        self._state = WorkflowState(
            stage=WorkflowStage.ABORTED,
            candidate=None,
            abort_reason=reason,
            error_message=message,
        )
        first = not self._abort_reported
        self._abort_reported = True
        return first

    def _report_abort(self, reason: AbortReason, message: str, first: bool) -> None:
        self._logger.info(
            "Workflow aborted",
            extra={"workflow_id": self.id, "venue_id": self.venue.id, "reason": reason.value},
        )
        self._notify("info" if reason == AbortReason.CANCELLED else "error", message)
        if first and self._on_abort is not None:
            self._on_abort(reason, message)

    def _notify(self, level: str, text: str) -> None:
        if self._notifier is not None:
            self._notifier.notify(level, text)
