from __future__ import annotations

import re
from datetime import date, datetime, tzinfo

from app.application.exceptions import MalformedTimeError
from app.domain.entities.slot import Slot

TIME_24H_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")
TIME_12H_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(am|pm)\s*$", re.IGNORECASE)


def parse_time24(value: str) -> tuple[int, int]:
    """Parse 'H:MM' / 'HH:MM' into (hour, minute)."""
    match = TIME_24H_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise MalformedTimeError(value)
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise MalformedTimeError(value)
    return hour, minute


def parse_time12(value: str) -> tuple[int, int]:
    """Parse 'H:MM am|pm' into (hour, minute) on the 24-hour clock."""
    match = TIME_12H_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise MalformedTimeError(value)
    hour, minute = int(match.group(1)), int(match.group(2))
    period = match.group(3).lower()
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise MalformedTimeError(value)

    if period == "pm" and hour != 12:
        hour += 12
    elif period == "am" and hour == 12:
        hour = 0
    return hour, minute


def to_twelve_hour(time24: str) -> str:
    """'13:05' -> '01:05 pm'. Midnight is '12:00 am', noon is '12:00 pm'."""
    hour, minute = parse_time24(time24)
    hour12 = 12 if hour % 12 == 0 else hour % 12
    period = "am" if hour < 12 else "pm"
    return f"{hour12:02d}:{minute:02d} {period}"


def to_twenty_four_hour(time12: str) -> str:
    """'01:05 pm' -> '13:05'."""
    hour, minute = parse_time12(time12)
    return f"{hour:02d}:{minute:02d}"


def parse_slot(value: str | Slot) -> Slot:
    """Accept a Slot, a 24-hour string or a 12-hour string."""
    if isinstance(value, Slot):
        return value
    if isinstance(value, str) and TIME_12H_PATTERN.match(value):
        return Slot.at(*parse_time12(value))
    return Slot.at(*parse_time24(value))


def enumerate_slots(open_time: str | Slot, close_time: str | Slot, interval_minutes: int) -> list[Slot]:
    """Slots from open to close inclusive: floor((close - open) / interval) + 1 of them."""
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")
    start = parse_slot(open_time)
    end = parse_slot(close_time)
    if end < start:
        raise ValueError(f"close time {end} is before open time {start}")

    count = (end.minutes - start.minutes) // interval_minutes + 1
    return [Slot(start.minutes + i * interval_minutes) for i in range(count)]


class TimeGrid:
    """Fixed discretization of the operating day."""

    def __init__(
        self,
        open_time: str | Slot = "09:00",
        close_time: str | Slot = "17:00",
        interval_minutes: int = 15,
    ) -> None:
        self._open = parse_slot(open_time)
        self._close = parse_slot(close_time)
        self._interval = interval_minutes
        self._slots = tuple(enumerate_slots(self._open, self._close, interval_minutes))
        self._index = {slot: i for i, slot in enumerate(self._slots)}

    @property
    def slots(self) -> tuple[Slot, ...]:
        return self._slots

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def interval_minutes(self) -> int:
        return self._interval

    @property
    def last_slot(self) -> Slot:
        return self._slots[-1]

    def index_of(self, slot: Slot) -> int | None:
        return self._index.get(slot)

    def slot_at(self, index: int) -> Slot | None:
        if 0 <= index < len(self._slots):
            return self._slots[index]
        return None

    def contains(self, slot: Slot) -> bool:
        return slot in self._index

    def is_valid_start(self, slot: Slot) -> bool:
        # The closing boundary is enumerated so runs can reach it, but a slot
        # that opens at or after closing time cannot start a service.
        return slot in self._index and slot.minutes + self._interval <= self._close.minutes

    def run_from(self, start: Slot, count: int) -> tuple[Slot, ...]:
        """Up to `count` consecutive slots from `start`, truncated at the end of the day."""
        index = self.index_of(start)
        if index is None:
            return ()
        return self._slots[index : index + count]

    def slot_datetime(self, day: date, slot: Slot, tz: tzinfo) -> datetime:
        return datetime.combine(day, slot.as_time(), tzinfo=tz)

    def display(self, slot: Slot) -> str:
        return to_twelve_hour(slot.time24)
