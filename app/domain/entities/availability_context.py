from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.staff import StaffMember
from app.domain.entities.unavailability import UnavailabilityBlock


@dataclass(frozen=True)
class AvailabilityContext:
    """Read-only snapshot of everything an availability query looks at."""

    bookings: tuple[Booking, ...] = ()
    blocks: tuple[UnavailabilityBlock, ...] = ()
    services: tuple[ServiceDefinition, ...] = ()
    staff: tuple[StaffMember, ...] = ()

    def bookings_on(self, day: date) -> list[Booking]:
        return [b for b in self.bookings if b.date == day]

    def blocks_on(self, day: date) -> list[UnavailabilityBlock]:
        return [b for b in self.blocks if b.date == day]

    def active_staff(self) -> list[StaffMember]:
        return [s for s in self.staff if s.is_active]
