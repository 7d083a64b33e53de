from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from venuebook.domain.entities.candidate_range import CandidateRange


class WorkflowStage(str, Enum):
    REVIEW = "review"
    PAYMENT_SELECTION = "payment_selection"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "Credit Card"
    GOOGLE_PAY = "Google Pay"
    APPLE_PAY = "Apple Pay"


class AbortReason(str, Enum):
    CANCELLED = "cancelled"  # closed before any submission
    SUBMISSION_FAILED = "submission_failed"


TERMINAL_STAGES = frozenset({WorkflowStage.CONFIRMED, WorkflowStage.ABORTED})


@dataclass(frozen=True)
class WorkflowState:
    stage: WorkflowStage = WorkflowStage.REVIEW
    candidate: CandidateRange | None = None
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    confirmation_id: str | None = None  # display-only, set once confirmed
    reservation_id: str | None = None
    abort_reason: AbortReason | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES


@dataclass(frozen=True)
class BookingSummary:
    venue_name: str
    date_from: str
    date_to: str
    guests: int
    nights: int
    total_cost: float
    payment_method: PaymentMethod
    confirmation_id: str | None = None
