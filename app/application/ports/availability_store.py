from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from app.domain.entities.unavailability import UnavailabilityBlock


class AvailabilityStorePort(ABC):
    @abstractmethod
    def list_blocks(self, start: date | None = None, end: date | None = None) -> list[UnavailabilityBlock]:
        """Blocked slots dated within [start, end], one entry per slot."""
        raise NotImplementedError
