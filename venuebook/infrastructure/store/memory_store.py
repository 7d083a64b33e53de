from __future__ import annotations

import threading

from venuebook.application.ports.workflow_store import WorkflowStorePort
from venuebook.application.use_cases.reservation_workflow import ReservationWorkflow


class MemoryWorkflowStore(WorkflowStorePort):
    def __init__(self, limit: int = 1000) -> None:
        self._workflows: dict[str, ReservationWorkflow] = {}
        self._lock = threading.Lock()
        self._limit = limit

    def put(self, workflow: ReservationWorkflow) -> None:
        with self._lock:
            self._workflows[workflow.id] = workflow
            while len(self._workflows) > self._limit:
                self._workflows.pop(self._eviction_candidate())

    def get(self, workflow_id: str) -> ReservationWorkflow | None:
        with self._lock:
            return self._workflows.get(workflow_id)

    def discard(self, workflow_id: str) -> None:
        with self._lock:
            self._workflows.pop(workflow_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._workflows)

    def _eviction_candidate(self) -> str:
        # Oldest finished workflow first, otherwise the oldest one overall.
        for workflow_id, workflow in self._workflows.items():
            if workflow.state.is_terminal:
                return workflow_id
        return next(iter(self._workflows))
