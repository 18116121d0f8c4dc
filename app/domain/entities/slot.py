from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True, order=True)
class Slot:
    """A grid interval identified by its start, stored as minutes since midnight."""

    minutes: int

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    @property
    def time24(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def as_time(self) -> time:
        return time(self.hour, self.minute)

    @classmethod
    def at(cls, hour: int, minute: int = 0) -> "Slot":
        return cls(hour * 60 + minute)

    def __str__(self) -> str:
        return self.time24
