from __future__ import annotations

from typing import Any


class InvalidRangeError(ValueError):
    """Raised when a date span ends before it starts."""
    pass


class BookingValidationError(ValueError):
    """Raised when a candidate range is not bookable against the current snapshot."""

    def __init__(self, result: Any, message: str) -> None:
        super().__init__(message)
        self.result = result
        self.message = message


class WorkflowTransitionError(RuntimeError):
    """Raised when an action is not allowed in the workflow's current stage."""
    pass


class ReservationSubmissionError(RuntimeError):
    """Base for failures while creating a reservation remotely."""

    category = "submission"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GatewayError(ReservationSubmissionError):
    """Raised when the reservation service rejects a request (4xx/5xx)."""

    category = "gateway"

    def __init__(self, message: str, status_code: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class TransportError(ReservationSubmissionError):
    """Raised on network failures, timeouts or unexpected response shapes."""

    category = "transport"
