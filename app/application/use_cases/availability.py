from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.application.use_cases.occupancy import OccupancyIndex
from app.application.utils.duration import required_slot_count, validate_duration
from app.application.utils.time_grid import TimeGrid, parse_slot
from app.domain.entities.availability import BookabilityDecision, ErrorKind, RequiredRun
from app.domain.entities.availability_context import AvailabilityContext
from app.domain.entities.slot import Slot


class AvailabilityEngine:
    """
    Answers bookability questions against one immutable snapshot.

    Nothing here reads ambient state: the snapshot, grid, timezone and the
    current instant are all supplied by the caller.
    """

    def __init__(self, context: AvailabilityContext, grid: TimeGrid, timezone: ZoneInfo) -> None:
        self._context = context
        self._grid = grid
        self._timezone = timezone
        self._occupancy = OccupancyIndex(context, grid)
        self._logger = logging.getLogger(__name__)

    @property
    def grid(self) -> TimeGrid:
        return self._grid

    @property
    def context(self) -> AvailabilityContext:
        return self._context

    @property
    def occupancy(self) -> OccupancyIndex:
        return self._occupancy

    def required_run(self, start: Slot | str, total_minutes: float) -> RequiredRun:
        """The consecutive slots a service starting at `start` needs, or Rejected(OVERFLOW)."""
        validate_duration(total_minutes)
        slot = parse_slot(start)
        count = required_slot_count(total_minutes, self._grid.interval_minutes)
        index = self._grid.index_of(slot)

        if index is None or not self._grid.is_valid_start(slot):
            return RequiredRun(rejected=ErrorKind.OVERFLOW)
        if index + count > self._grid.slot_count:
            return RequiredRun(rejected=ErrorKind.OVERFLOW)
        return RequiredRun(slots=self._grid.slots[index : index + count])

    def occupied_run_for(self, day: date, start: Slot | str, duration_minutes: float) -> tuple[Slot, ...]:
        """Slots consumed by an existing booking. Never rejects; truncates at closing."""
        count = required_slot_count(validate_duration(duration_minutes), self._grid.interval_minutes)
        return self._grid.run_from(parse_slot(start), count)

    def is_past(self, day: date, start: Slot | str, now: datetime | None = None) -> bool:
        """Only today's slots can be past; other dates never are."""
        current = self._now(now)
        if day != current.date():
            return False
        return self._grid.slot_datetime(day, parse_slot(start), self._timezone) < current

    def is_date_in_past(self, day: date, now: datetime | None = None) -> bool:
        return day < self._now(now).date()

    def is_bookable(
        self,
        day: date,
        start: Slot | str,
        total_minutes: float,
        staff_id: str | None = None,
        now: datetime | None = None,
    ) -> BookabilityDecision:
        """
        Evaluate a candidate booking. The first failing check wins:
        PAST_CUTOFF, then OVERFLOW, then OCCUPIED.
        """
        validate_duration(total_minutes)
        slot = parse_slot(start)

        if self.is_past(day, slot, now):
            return self._reject(ErrorKind.PAST_CUTOFF, day, slot, staff_id)

        run = self.required_run(slot, total_minutes)
        if not run.ok:
            return self._reject(ErrorKind.OVERFLOW, day, slot, staff_id)

        occupied = self._occupancy.occupied_slots(day, staff_id)
        if any(s in occupied for s in run.slots):
            return self._reject(ErrorKind.OCCUPIED, day, slot, staff_id, run.slots)

        return BookabilityDecision.accept(run.slots)

    def bookable_starts(
        self,
        day: date,
        total_minutes: float,
        staff_id: str | None = None,
        now: datetime | None = None,
    ) -> list[Slot]:
        return [
            slot
            for slot in self._grid.slots
            if self.is_bookable(day, slot, total_minutes, staff_id, now).bookable
        ]

    def is_date_fully_booked(self, day: date, staff_id: str | None = None) -> bool:
        """
        True when every enumerated slot is occupied or blocked.

        Each slot is probed as a one-slot run regardless of the service being
        shopped for, so a day with scattered single free slots is reported as
        not fully booked even when no longer service could fit.
        """
        occupied = self._occupancy.occupied_slots(day, staff_id)
        return all(slot in occupied for slot in self._grid.slots)

    def fully_booked_dates(self, days: Iterable[date], staff_id: str | None = None) -> list[date]:
        return [day for day in days if self.is_date_fully_booked(day, staff_id)]

    def fully_booked_staff(self, day: date) -> list[str]:
        """Active roster members with no free one-slot probe left on `day`."""
        return [
            member.staff_id
            for member in self._context.active_staff()
            if self.is_date_fully_booked(day, member.staff_id)
        ]

    def _now(self, now: datetime | None) -> datetime:
        if now is None:
            return datetime.now(self._timezone)
        if now.tzinfo is None:
            return now.replace(tzinfo=self._timezone)
        return now.astimezone(self._timezone)

    def _reject(
        self,
        reason: ErrorKind,
        day: date,
        slot: Slot,
        staff_id: str | None,
        run: tuple[Slot, ...] = (),
    ) -> BookabilityDecision:
        self._logger.debug(
            "Slot unbookable",
            extra={"date": day.isoformat(), "slot": str(slot), "staff_id": staff_id, "reason": reason.value},
        )
        return BookabilityDecision.reject(reason, run)
