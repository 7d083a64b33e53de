from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CandidateRange:
    date_from: date | None = None
    date_to: date | None = None
    guests: int = 1

    @property
    def nights(self) -> int:
        # 0 for an incomplete or non-forward range; partial days round up.
        if self.date_from is None or self.date_to is None or self.date_to <= self.date_from:
            return 0
        return math.ceil((self.date_to - self.date_from).total_seconds() / 86400)

    def total_cost(self, price_per_night: float) -> float:
        return self.nights * price_per_night
