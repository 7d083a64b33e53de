from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator

from venuebook.application.utils.range_validator import ValidationResult
from venuebook.domain.entities.workflow_state import AbortReason, PaymentMethod, WorkflowStage


class CandidateRangeSchema(BaseModel):
    date_from: date | None = None
    date_to: date | None = None
    guests: Any = 1  # raw input, clamped server-side

    @model_validator(mode="after")
    def check_order(self) -> "CandidateRangeSchema":
        if self.date_from and self.date_to and self.date_to <= self.date_from:
            raise ValueError("date_to must be after date_from")
        return self


class AvailabilityResponseSchema(BaseModel):
    venue_id: str
    occupied_days: list[date]


class ValidationResponseSchema(BaseModel):
    result: ValidationResult
    message: str | None = None
    guests: int
    nights: int
    total_cost: float


class PaymentMethodSchema(BaseModel):
    payment_method: PaymentMethod


class BookingSummarySchema(BaseModel):
    venue_name: str
    date_from: str
    date_to: str
    guests: int
    nights: int
    total_cost: float
    payment_method: PaymentMethod
    confirmation_id: str | None = None


class WorkflowResponseSchema(BaseModel):
    workflow_id: str
    venue_id: str
    stage: WorkflowStage
    payment_method: PaymentMethod
    available_actions: list[str] = Field(default_factory=list)
    summary: BookingSummarySchema | None = None
    abort_reason: AbortReason | None = None
    error_message: str | None = None
