from __future__ import annotations

import logging
from datetime import date

from app.application.utils.duration import required_slot_count
from app.application.utils.time_grid import TimeGrid
from app.domain.entities.availability_context import AvailabilityContext
from app.domain.entities.booking import Booking, is_occupying
from app.domain.entities.slot import Slot


class OccupancyIndex:
    """
    Per-date occupied slots derived from one snapshot.

    staff_id=None is the salon-wide view: bookings and blocks of every staff
    member are unioned. A specific staff id sees its own bookings, bookings
    with no staff member assigned, and its own and salon-wide blocks. The
    snapshot is immutable, so results are memoized for the lifetime of the
    index.
    """

    def __init__(self, context: AvailabilityContext, grid: TimeGrid) -> None:
        self._context = context
        self._grid = grid
        self._booked: dict[tuple[date, str | None], frozenset[Slot]] = {}
        self._blocked: dict[tuple[date, str | None], frozenset[Slot]] = {}
        self._logger = logging.getLogger(__name__)

    def run_for_booking(self, booking: Booking) -> tuple[Slot, ...]:
        count = required_slot_count(booking.duration_minutes, self._grid.interval_minutes)
        run = self._grid.run_from(booking.start, count)
        if not run:
            self._logger.debug(
                "Booking start is off the grid, occupies no slots",
                extra={"record_id": booking.booking_id, "slot": str(booking.start)},
            )
        return run

    def booked_slots(self, day: date, staff_id: str | None = None) -> frozenset[Slot]:
        key = (day, staff_id)
        if key not in self._booked:
            slots: set[Slot] = set()
            for booking in self._context.bookings_on(day):
                if not is_occupying(booking):
                    continue
                if staff_id is not None and booking.staff_id not in (None, staff_id):
                    continue
                slots.update(self.run_for_booking(booking))
            self._booked[key] = frozenset(slots)
        return self._booked[key]

    def blocked_slots(self, day: date, staff_id: str | None = None) -> frozenset[Slot]:
        key = (day, staff_id)
        if key not in self._blocked:
            self._blocked[key] = frozenset(
                block.start
                for block in self._context.blocks_on(day)
                if block.applies_to(staff_id) and self._grid.contains(block.start)
            )
        return self._blocked[key]

    def occupied_slots(self, day: date, staff_id: str | None = None) -> frozenset[Slot]:
        return self.booked_slots(day, staff_id) | self.blocked_slots(day, staff_id)
