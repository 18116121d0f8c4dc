"""
Tests for the operating-day grid and wall-clock conversions.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import MalformedTimeError
from app.application.utils.time_grid import (
    TimeGrid,
    enumerate_slots,
    parse_slot,
    to_twelve_hour,
    to_twenty_four_hour,
)
from app.domain.entities.availability import ErrorKind
from app.domain.entities.slot import Slot


def test_default_day_has_33_slots():
    grid = TimeGrid()
    assert grid.slot_count == 33
    assert grid.slots[0] == Slot.at(9, 0)
    assert grid.last_slot == Slot.at(17, 0)
    assert [str(s) for s in grid.slots[:3]] == ["09:00", "09:15", "09:30"]


def test_enumerate_slots_count_formula():
    assert len(enumerate_slots("09:00", "17:00", 15)) == (17 - 9) * 4 + 1
    assert len(enumerate_slots("09:00", "10:00", 25)) == 60 // 25 + 1
    assert [str(s) for s in enumerate_slots("09:00", "10:00", 25)] == ["09:00", "09:25", "09:50"]


def test_enumerate_slots_rejects_bad_config():
    with pytest.raises(ValueError):
        enumerate_slots("09:00", "17:00", 0)
    with pytest.raises(ValueError):
        enumerate_slots("17:00", "09:00", 15)


def test_index_of_and_slot_at():
    grid = TimeGrid()
    assert grid.index_of(Slot.at(9, 0)) == 0
    assert grid.index_of(Slot.at(16, 45)) == 31
    assert grid.index_of(Slot.at(9, 10)) is None
    assert grid.index_of(Slot.at(18, 0)) is None
    assert grid.slot_at(32) == Slot.at(17, 0)
    assert grid.slot_at(33) is None


def test_closing_boundary_is_not_a_valid_start():
    grid = TimeGrid()
    assert grid.is_valid_start(Slot.at(16, 45))
    assert not grid.is_valid_start(Slot.at(17, 0))
    assert not grid.is_valid_start(Slot.at(9, 5))


def test_to_twelve_hour():
    assert to_twelve_hour("09:00") == "09:00 am"
    assert to_twelve_hour("13:05") == "01:05 pm"
    assert to_twelve_hour("12:00") == "12:00 pm"
    assert to_twelve_hour("00:00") == "12:00 am"
    assert to_twelve_hour("9:30") == "09:30 am"


def test_to_twenty_four_hour():
    assert to_twenty_four_hour("09:00 am") == "09:00"
    assert to_twenty_four_hour("1:05 PM") == "13:05"
    assert to_twenty_four_hour("12:00 pm") == "12:00"
    assert to_twenty_four_hour("12:30 am") == "00:30"
    assert to_twenty_four_hour("11:59pm") == "23:59"


def test_round_trip_every_minute_of_the_day():
    for hour in range(24):
        for minute in range(60):
            time24 = f"{hour:02d}:{minute:02d}"
            assert to_twenty_four_hour(to_twelve_hour(time24)) == time24


@pytest.mark.parametrize(
    "value",
    ["", "9", "9:5", "24:00", "12:60", "ab:cd", "09:00 xm", "13:00 pm", "0:00 am", None, 900],
)
def test_malformed_times_raise(value):
    with pytest.raises(MalformedTimeError) as exc_info:
        if isinstance(value, str) and ("am" in value or "pm" in value or "xm" in value):
            to_twenty_four_hour(value)
        else:
            to_twelve_hour(value)
    assert exc_info.value.kind == ErrorKind.MALFORMED_TIME


def test_parse_slot_accepts_both_forms():
    assert parse_slot("14:15") == Slot.at(14, 15)
    assert parse_slot("02:15 pm") == Slot.at(14, 15)
    assert parse_slot(Slot.at(10, 0)) == Slot.at(10, 0)
    with pytest.raises(MalformedTimeError):
        parse_slot("quarter past two")


def test_display_uses_twelve_hour_form():
    grid = TimeGrid()
    assert grid.display(Slot.at(12, 0)) == "12:00 pm"
    assert grid.display(Slot.at(9, 45)) == "09:45 am"
