from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.domain.entities.slot import Slot

ALL_STAFF = "ALL"


@dataclass(frozen=True)
class UnavailabilityBlock:
    date: date
    start: Slot
    staff_id: str = ALL_STAFF  # staff member id, or ALL_STAFF for salon-wide
    reason: str = ""
    block_id: str | None = None

    @property
    def is_salon_wide(self) -> bool:
        return self.staff_id == ALL_STAFF

    def applies_to(self, staff_id: str | None) -> bool:
        """Salon-wide queries (staff_id=None) see every block."""
        if staff_id is None or self.is_salon_wide:
            return True
        return self.staff_id == staff_id
