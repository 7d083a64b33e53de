from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from venuebook.application.utils.calendar_math import to_api_datetime
from venuebook.domain.entities.candidate_range import CandidateRange


class ReservationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date_from: str = Field(alias="dateFrom")
    date_to: str = Field(alias="dateTo")
    guests: int = Field(ge=1)
    venue_id: str = Field(alias="venueId")

    @classmethod
    def from_candidate(cls, candidate: CandidateRange, venue_id: str) -> "ReservationPayload":
        if candidate.date_from is None or candidate.date_to is None:
            raise ValueError("Both dates are required to build a reservation payload")
        return cls(
            date_from=to_api_datetime(candidate.date_from),
            date_to=to_api_datetime(candidate.date_to),
            guests=candidate.guests,
            venue_id=venue_id,
        )

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
