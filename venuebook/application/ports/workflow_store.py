from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from venuebook.application.use_cases.reservation_workflow import ReservationWorkflow


class WorkflowStorePort(ABC):
    @abstractmethod
    def put(self, workflow: "ReservationWorkflow") -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, workflow_id: str) -> "ReservationWorkflow | None":
        raise NotImplementedError

    @abstractmethod
    def discard(self, workflow_id: str) -> None:
        raise NotImplementedError
