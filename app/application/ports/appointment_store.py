from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date

from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import ServiceDefinition


class AppointmentStorePort(ABC):
    @abstractmethod
    def list_bookings(
        self,
        start: date | None = None,
        end: date | None = None,
        services: Sequence[ServiceDefinition] | None = None,
    ) -> list[Booking]:
        """
        Bookings dated within [start, end], cancelled ones included.

        `services` is the catalog already loaded by the caller; stores that
        have to price bookings without a stored total use it instead of
        fetching the catalog again.
        """
        raise NotImplementedError
