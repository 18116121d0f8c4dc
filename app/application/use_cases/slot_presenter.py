from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from app.application.use_cases.availability import AvailabilityEngine
from app.domain.entities.availability import RequiredRun, RunPosition, SlotState
from app.domain.entities.slot import Slot

LABEL_PASSED = "Passed"
LABEL_BOOKED = "Booked"
LABEL_START = "▼ START"
LABEL_END = "▲ END"


def slot_state(is_past: bool, is_blocked: bool, is_booked: bool, in_selected_range: bool) -> SlotState:
    """Exactly one state per slot, first match wins."""
    if is_past:
        return SlotState.PAST
    if is_blocked:
        return SlotState.BLOCKED
    if is_booked:
        return SlotState.BOOKED
    if in_selected_range:
        return SlotState.SELECTED_RANGE
    return SlotState.FREE


def label(state: SlotState, position: RunPosition | None = None) -> str | None:
    if state == SlotState.PAST:
        return LABEL_PASSED
    if state in (SlotState.BLOCKED, SlotState.BOOKED):
        return LABEL_BOOKED
    if state == SlotState.SELECTED_RANGE and position is not None:
        if position.is_first:
            return LABEL_START
        if position.is_last and position.total > 1:
            return LABEL_END
        return f"{position.position}/{position.total}"
    return None


@dataclass(frozen=True)
class SlotView:
    slot: Slot
    display: str  # 12-hour form, e.g. "09:15 am"
    state: SlotState
    label: str | None
    clickable: bool
    position: RunPosition | None = None


class SlotPresenter:
    def __init__(self, engine: AvailabilityEngine) -> None:
        self._engine = engine

    def present_day(
        self,
        day: date,
        staff_id: str | None = None,
        total_minutes: int | None = None,
        selected_start: Slot | str | None = None,
        now: datetime | None = None,
    ) -> list[SlotView]:
        """
        Build the slot board for one date.

        total_minutes is the duration of the services being shopped for; with
        nothing selected every slot is probed as a single slot and none is
        clickable. A slot is shown blocked when the run starting there touches
        a blocked slot.
        """
        engine = self._engine
        grid = engine.grid
        probe_minutes = total_minutes or grid.interval_minutes

        booked = engine.occupancy.booked_slots(day, staff_id)
        blocked = engine.occupancy.blocked_slots(day, staff_id)
        selected = RequiredRun()
        if selected_start is not None:
            selected = engine.required_run(selected_start, probe_minutes)

        views: list[SlotView] = []
        for slot in grid.slots:
            probe = engine.required_run(slot, probe_minutes)
            is_blocked = slot in blocked or any(s in blocked for s in probe.slots)
            position = selected.position_of(slot)
            state = slot_state(
                is_past=engine.is_past(day, slot, now),
                is_blocked=is_blocked,
                is_booked=slot in booked,
                in_selected_range=position is not None,
            )

            clickable = (
                bool(total_minutes)
                and state in (SlotState.FREE, SlotState.SELECTED_RANGE)
                and engine.is_bookable(day, slot, probe_minutes, staff_id, now).bookable
            )
            views.append(
                SlotView(
                    slot=slot,
                    display=grid.display(slot),
                    state=state,
                    label=label(state, position),
                    clickable=clickable,
                    position=position,
                )
            )
        return views
