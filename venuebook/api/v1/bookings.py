from dataclasses import asdict
import logging

from fastapi import APIRouter, Depends, HTTPException

from venuebook.api.v1.schemas import (
    AvailabilityResponseSchema,
    BookingSummarySchema,
    CandidateRangeSchema,
    PaymentMethodSchema,
    ValidationResponseSchema,
    WorkflowResponseSchema,
)
from venuebook.application.exceptions import (
    BookingValidationError,
    ReservationSubmissionError,
    WorkflowTransitionError,
)
from venuebook.application.ports.workflow_store import WorkflowStorePort
from venuebook.application.use_cases.reservation_workflow import ReservationWorkflow
from venuebook.application.use_cases.venue_booking import VenueBookingUseCase
from venuebook.domain.entities.candidate_range import CandidateRange
from venuebook.wiring.dependencies import get_venue_booking_use_case, get_workflow_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _load_venue(uc: VenueBookingUseCase) -> None:
    try:
        uc.refresh()
    except ReservationSubmissionError as e:
        status = getattr(e, "status_code", None)
        raise HTTPException(status_code=404 if status == 404 else 502, detail=e.message)


def _to_candidate(req: CandidateRangeSchema, uc: VenueBookingUseCase) -> CandidateRange:
    return CandidateRange(date_from=req.date_from, date_to=req.date_to, guests=uc.normalize_guests(req.guests))


def _to_response(workflow: ReservationWorkflow) -> WorkflowResponseSchema:
    summary = workflow.summary()
    state = workflow.state
    return WorkflowResponseSchema(
        workflow_id=workflow.id,
        venue_id=workflow.venue.id,
        stage=state.stage,
        payment_method=state.payment_method,
        available_actions=sorted(workflow.available_actions),
        summary=BookingSummarySchema(**asdict(summary)) if summary else None,
        abort_reason=state.abort_reason,
        error_message=state.error_message,
    )


def _get_workflow(workflow_id: str, store: WorkflowStorePort) -> ReservationWorkflow:
    workflow = store.get(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail="Unknown workflow")
    return workflow


@router.get("/venues/{venue_id}/availability", response_model=AvailabilityResponseSchema)
def availability(venue_id: str):
    uc = get_venue_booking_use_case(venue_id)
    _load_venue(uc)
    return AvailabilityResponseSchema(venue_id=venue_id, occupied_days=sorted(uc.occupied))


@router.post("/venues/{venue_id}/validate", response_model=ValidationResponseSchema)
def validate(venue_id: str, req: CandidateRangeSchema):
    uc = get_venue_booking_use_case(venue_id)
    _load_venue(uc)
    candidate = _to_candidate(req, uc)
    check = uc.check(candidate)
    return ValidationResponseSchema(
        result=check.result,
        message=check.message,
        guests=candidate.guests,
        nights=check.nights,
        total_cost=check.total_cost,
    )


@router.post("/venues/{venue_id}/workflows", response_model=WorkflowResponseSchema, status_code=201)
def start_workflow(
    venue_id: str,
    req: CandidateRangeSchema,
    store: WorkflowStorePort = Depends(get_workflow_store),
):
    uc = get_venue_booking_use_case(venue_id)
    _load_venue(uc)
    try:
        workflow = uc.start_workflow(_to_candidate(req, uc))
    except BookingValidationError as e:
        raise HTTPException(status_code=400, detail={"result": e.result.value, "message": e.message})
    store.put(workflow)
    logger.info("Workflow started", extra={"workflow_id": workflow.id, "venue_id": venue_id})
    return _to_response(workflow)


@router.get("/workflows/{workflow_id}", response_model=WorkflowResponseSchema)
def get_workflow(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    return _to_response(_get_workflow(workflow_id, store))


def _act(workflow_id: str, store: WorkflowStorePort, action: str, *args) -> WorkflowResponseSchema:
    workflow = _get_workflow(workflow_id, store)
    try:
        getattr(workflow, action)(*args)
    except WorkflowTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _to_response(workflow)


@router.post("/workflows/{workflow_id}/confirm", response_model=WorkflowResponseSchema)
def confirm(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    return _act(workflow_id, store, "confirm")


@router.post("/workflows/{workflow_id}/back", response_model=WorkflowResponseSchema)
def back(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    return _act(workflow_id, store, "back")


@router.put("/workflows/{workflow_id}/payment-method", response_model=WorkflowResponseSchema)
def select_payment(
    workflow_id: str,
    req: PaymentMethodSchema,
    store: WorkflowStorePort = Depends(get_workflow_store),
):
    return _act(workflow_id, store, "select_payment", req.payment_method)


@router.post("/workflows/{workflow_id}/pay", response_model=WorkflowResponseSchema)
def pay(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    return _act(workflow_id, store, "pay")


@router.post("/workflows/{workflow_id}/cancel", response_model=WorkflowResponseSchema)
def cancel(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    return _act(workflow_id, store, "cancel")


@router.post("/workflows/{workflow_id}/close", response_model=WorkflowResponseSchema)
def close(workflow_id: str, store: WorkflowStorePort = Depends(get_workflow_store)):
    response = _act(workflow_id, store, "close")
    store.discard(workflow_id)
    return response
