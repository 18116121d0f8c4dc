from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.slot import Slot


class ErrorKind(str, Enum):
    MALFORMED_TIME = "malformed_time"
    INVALID_DURATION = "invalid_duration"
    OVERFLOW = "overflow"
    NOT_FOUND = "not_found"
    PAST_CUTOFF = "past_cutoff"
    OCCUPIED = "occupied"


class SlotState(str, Enum):
    # Declaration order is the priority order used when states compete.
    PAST = "past"
    BLOCKED = "blocked"
    BOOKED = "booked"
    SELECTED_RANGE = "selected_range"
    FREE = "free"


@dataclass(frozen=True)
class RequiredRun:
    slots: tuple[Slot, ...] = ()
    rejected: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.rejected is None

    def __len__(self) -> int:
        return len(self.slots)

    def __contains__(self, slot: object) -> bool:
        return slot in self.slots

    def position_of(self, slot: Slot) -> "RunPosition | None":
        if slot not in self.slots:
            return None
        return RunPosition(index=self.slots.index(slot), total=len(self.slots))


@dataclass(frozen=True)
class RunPosition:
    index: int  # zero-based
    total: int

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1

    @property
    def position(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class BookabilityDecision:
    bookable: bool
    reason: ErrorKind | None
    run: tuple[Slot, ...] = ()

    @classmethod
    def accept(cls, run: tuple[Slot, ...]) -> "BookabilityDecision":
        return cls(True, None, run)

    @classmethod
    def reject(cls, reason: ErrorKind, run: tuple[Slot, ...] = ()) -> "BookabilityDecision":
        return cls(False, reason, run)
