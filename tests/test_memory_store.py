from __future__ import annotations

from datetime import date

from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.application.use_cases.reservation_workflow import ReservationWorkflow
from venuebook.domain.entities.candidate_range import CandidateRange
from venuebook.domain.entities.workflow_state import WorkflowStage
from venuebook.domain.entities.venue import Venue
from venuebook.infrastructure.store.memory_store import MemoryWorkflowStore

VENUE = Venue(id="venue-1", name="Fjord Cabin", price_per_night=100.0, max_guests=4)


class UnusedGateway(ReservationGatewayPort):
    def create(self, payload, idempotency_key=None):
        raise AssertionError("gateway should not be called")


def _workflow(workflow_id: str) -> ReservationWorkflow:
    candidate = CandidateRange(date(2025, 3, 1), date(2025, 3, 4), 2)
    return ReservationWorkflow(VENUE, candidate, UnusedGateway(), workflow_id=workflow_id)


def test_open_workflows_are_evicted_past_the_limit():
    store = MemoryWorkflowStore(limit=3)
    for i in range(10):
        store.put(_workflow(f"wf-{i}"))

    assert len(store) == 3
    assert store.get("wf-0") is None
    assert store.get("wf-6") is None
    assert [store.get(f"wf-{i}").id for i in (7, 8, 9)] == ["wf-7", "wf-8", "wf-9"]


def test_finished_workflows_are_evicted_first():
    store = MemoryWorkflowStore(limit=2)
    oldest = _workflow("wf-open")
    finished = _workflow("wf-done")
    finished.cancel()
    assert finished.stage == WorkflowStage.ABORTED

    store.put(oldest)
    store.put(finished)
    store.put(_workflow("wf-new"))

    assert store.get("wf-done") is None
    assert store.get("wf-open") is oldest
    assert store.get("wf-new") is not None


def test_discard_removes_workflow():
    store = MemoryWorkflowStore()
    store.put(_workflow("wf-1"))
    store.discard("wf-1")
    store.discard("wf-1")
    assert store.get("wf-1") is None
    assert len(store) == 0
