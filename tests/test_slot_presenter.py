"""
Tests for slot state priority, labels and the day board.
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.application.use_cases.availability import AvailabilityEngine
from app.application.use_cases.slot_presenter import SlotPresenter, label, slot_state
from app.application.utils.time_grid import TimeGrid
from app.domain.entities.availability import RunPosition, SlotState
from app.domain.entities.availability_context import AvailabilityContext
from app.domain.entities.booking import Booking
from app.domain.entities.slot import Slot
from app.domain.entities.unavailability import UnavailabilityBlock

TZ = ZoneInfo("Africa/Johannesburg")
DAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 10, 0, tzinfo=TZ)
EARLY = datetime(2026, 3, 9, 8, 0, tzinfo=TZ)


def _board(bookings=(), blocks=(), **kwargs):
    context = AvailabilityContext(bookings=tuple(bookings), blocks=tuple(blocks))
    engine = AvailabilityEngine(context, TimeGrid(), TZ)
    views = SlotPresenter(engine).present_day(DAY, **kwargs)
    return {view.slot.time24: view for view in views}


def test_state_priority():
    assert slot_state(True, True, True, True) == SlotState.PAST
    assert slot_state(False, True, True, True) == SlotState.BLOCKED
    assert slot_state(False, False, True, True) == SlotState.BOOKED
    assert slot_state(False, False, False, True) == SlotState.SELECTED_RANGE
    assert slot_state(False, False, False, False) == SlotState.FREE


def test_labels():
    assert label(SlotState.PAST) == "Passed"
    assert label(SlotState.BOOKED) == "Booked"
    assert label(SlotState.BLOCKED) == "Booked"
    assert label(SlotState.FREE) is None
    assert label(SlotState.SELECTED_RANGE, RunPosition(0, 3)) == "▼ START"
    assert label(SlotState.SELECTED_RANGE, RunPosition(1, 3)) == "2/3"
    assert label(SlotState.SELECTED_RANGE, RunPosition(2, 3)) == "▲ END"


def test_single_slot_run_has_no_counter():
    assert label(SlotState.SELECTED_RANGE, RunPosition(0, 1)) == "▼ START"


def test_selected_range_without_position_has_no_label():
    assert label(SlotState.SELECTED_RANGE, None) is None


def test_board_covers_every_slot_in_order():
    board = _board(now=EARLY)
    assert list(board) == [s.time24 for s in TimeGrid().slots]
    assert board["09:00"].display == "09:00 am"
    assert board["13:30"].display == "01:30 pm"


def test_nothing_clickable_without_a_service():
    board = _board(now=EARLY)
    assert all(view.state == SlotState.FREE for view in board.values())
    assert not any(view.clickable for view in board.values())


def test_selected_run_is_labelled_start_to_end():
    board = _board(total_minutes=60, selected_start="11:00", now=EARLY)
    assert [board[t].label for t in ("11:00", "11:15", "11:30", "11:45")] == ["▼ START", "2/4", "3/4", "▲ END"]
    assert all(board[t].state == SlotState.SELECTED_RANGE for t in ("11:00", "11:15", "11:30", "11:45"))
    assert board["12:00"].state == SlotState.FREE
    assert board["11:00"].clickable


def test_past_slots_today():
    board = _board(total_minutes=15, now=NOW)
    assert board["09:45"].state == SlotState.PAST
    assert board["09:45"].label == "Passed"
    assert not board["09:45"].clickable
    assert board["10:00"].state == SlotState.FREE
    assert board["10:00"].clickable


def test_booked_run_is_shown_booked():
    booking = Booking("b1", DAY, Slot.at(13), 45, "anna")
    board = _board(bookings=[booking], staff_id="anna", total_minutes=15, now=EARLY)
    for t in ("13:00", "13:15", "13:30"):
        assert board[t].state == SlotState.BOOKED
        assert board[t].label == "Booked"
        assert not board[t].clickable
    assert board["13:45"].state == SlotState.FREE


def test_start_whose_run_touches_a_block_is_shown_blocked():
    block = UnavailabilityBlock(DAY, Slot.at(12), "ALL", "Lunch")
    board = _board(blocks=[block], total_minutes=45, now=EARLY)
    assert board["11:30"].state == SlotState.BLOCKED
    assert board["11:45"].state == SlotState.BLOCKED
    assert board["12:00"].state == SlotState.BLOCKED
    assert board["11:15"].state == SlotState.FREE
    assert board["12:15"].state == SlotState.FREE


def test_free_looking_slot_is_not_clickable_when_run_hits_a_booking():
    booking = Booking("b1", DAY, Slot.at(14), 30, "anna")
    board = _board(bookings=[booking], staff_id="anna", total_minutes=30, now=EARLY)
    assert board["13:45"].state == SlotState.FREE
    assert not board["13:45"].clickable
    assert board["13:30"].clickable


def test_overflowing_starts_are_not_clickable():
    board = _board(total_minutes=30, now=EARLY)
    assert board["16:45"].clickable
    assert not board["17:00"].clickable


def test_past_wins_over_selected_range():
    board = _board(total_minutes=30, selected_start="09:30", now=NOW)
    assert board["09:30"].state == SlotState.PAST
    assert board["09:30"].label == "Passed"
