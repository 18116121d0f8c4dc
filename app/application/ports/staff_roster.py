from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.staff import StaffMember


class StaffRosterPort(ABC):
    @abstractmethod
    def list_staff(self) -> list[StaffMember]:
        raise NotImplementedError
