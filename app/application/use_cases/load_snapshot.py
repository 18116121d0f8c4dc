from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.availability_store import AvailabilityStorePort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.staff_roster import StaffRosterPort
from app.domain.entities.availability_context import AvailabilityContext
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.unavailability import UnavailabilityBlock


def prune_expired_blocks(blocks: Iterable[UnavailabilityBlock], today: date) -> list[UnavailabilityBlock]:
    """Blocks dated before today can never affect a booking."""
    return [b for b in blocks if b.date >= today]


class LoadSnapshotUseCase:
    """Fetch bookings, blocks, services and staff into one immutable snapshot."""

    def __init__(
        self,
        appointments: AppointmentStorePort,
        blocks: AvailabilityStorePort,
        catalog: ServiceCatalogPort,
        roster: StaffRosterPort,
        fallback_catalog: ServiceCatalogPort | None = None,
    ) -> None:
        self._appointments = appointments
        self._blocks = blocks
        self._catalog = catalog
        self._roster = roster
        self._fallback_catalog = fallback_catalog
        self._logger = logging.getLogger(__name__)

    def load_services(self) -> list[ServiceDefinition]:
        return self._with_fallback(self._catalog.list_services())

    def execute(self, start: date, end: date, today: date) -> AvailabilityContext:
        catalog = self._catalog.list_services()
        services = self._with_fallback(catalog)

        # Inactive upstream services still price historical bookings.
        bookings = self._appointments.list_bookings(start, end, catalog or services)
        blocks = prune_expired_blocks(self._blocks.list_blocks(start, end), today)
        staff = self._roster.list_staff()

        self._logger.info(
            "Availability snapshot loaded",
            extra={
                "date": f"{start.isoformat()}..{end.isoformat()}",
                "bookings": len(bookings),
                "blocks": len(blocks),
                "services": len(services),
                "staff": len(staff),
            },
        )
        return AvailabilityContext(
            bookings=tuple(bookings),
            blocks=tuple(blocks),
            services=tuple(services),
            staff=tuple(staff),
        )

    def _with_fallback(self, services: list[ServiceDefinition]) -> list[ServiceDefinition]:
        if self._fallback_catalog is not None and not any(s.is_active for s in services):
            self._logger.warning("Service catalog has no active services, using fallback catalog")
            return self._fallback_catalog.list_services()
        return services
