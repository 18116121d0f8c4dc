from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.availability_store import AvailabilityStorePort
from app.application.ports.staff_roster import StaffRosterPort
from app.application.utils.date_range import in_window
from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.staff import StaffMember
from app.domain.entities.unavailability import UnavailabilityBlock


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self, bookings: Iterable[Booking] = ()) -> None:
        self._bookings: list[Booking] = list(bookings)

    def add(self, booking: Booking) -> None:
        self._bookings.append(booking)

    def list_bookings(
        self,
        start: date | None = None,
        end: date | None = None,
        services: Sequence[ServiceDefinition] | None = None,
    ) -> list[Booking]:
        return [b for b in self._bookings if in_window(b.date, start, end)]


class MemoryAvailabilityStore(AvailabilityStorePort):
    def __init__(self, blocks: Iterable[UnavailabilityBlock] = ()) -> None:
        self._blocks: list[UnavailabilityBlock] = list(blocks)

    def add(self, block: UnavailabilityBlock) -> None:
        self._blocks.append(block)

    def remove(self, block: UnavailabilityBlock) -> bool:
        if block in self._blocks:
            self._blocks.remove(block)
            return True
        return False

    def list_blocks(self, start: date | None = None, end: date | None = None) -> list[UnavailabilityBlock]:
        return [b for b in self._blocks if in_window(b.date, start, end)]


class MemoryStaffRoster(StaffRosterPort):
    def __init__(self, staff: Iterable[StaffMember] = ()) -> None:
        self._staff = list(staff)

    def list_staff(self) -> list[StaffMember]:
        return list(self._staff)
