from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from app.application.dto.salon_records import parse_appointments, parse_blocks, parse_services, parse_staff
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.availability_store import AvailabilityStorePort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.staff_roster import StaffRosterPort
from app.application.utils.date_range import in_window
from app.application.utils.duration import DEFAULT_BOOKING_DURATION_MINUTES, DurationResolver
from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.staff import StaffMember
from app.domain.entities.unavailability import UnavailabilityBlock
from app.infrastructure.salon_api.salon_api_client import SalonApiClient


class SalonApiServiceCatalog(ServiceCatalogPort):
    """Fetches the catalog once per instance; the wiring builds one per request."""

    def __init__(self, client: SalonApiClient) -> None:
        self._client = client
        self._services: list[ServiceDefinition] | None = None

    def list_services(self) -> list[ServiceDefinition]:
        if self._services is None:
            self._services = parse_services(self._client.fetch_list("services"))
        return list(self._services)

    def get_service(self, service_id: str) -> ServiceDefinition | None:
        return next((s for s in self.list_services() if s.service_id == service_id), None)


class SalonApiStaffRoster(StaffRosterPort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client

    def list_staff(self) -> list[StaffMember]:
        return parse_staff(self._client.fetch_list("employees"))


class SalonApiAppointmentStore(AppointmentStorePort):
    def __init__(
        self,
        client: SalonApiClient,
        catalog: ServiceCatalogPort,
        default_duration_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
    ) -> None:
        self._client = client
        self._catalog = catalog
        self._default_duration_minutes = default_duration_minutes

    def list_bookings(
        self,
        start: date | None = None,
        end: date | None = None,
        services: Sequence[ServiceDefinition] | None = None,
    ) -> list[Booking]:
        # Appointments without a stored total are priced out against the catalog.
        resolver = DurationResolver(self._catalog.list_services() if services is None else services)
        bookings = parse_appointments(
            self._client.fetch_list("appointments"),
            resolver,
            self._default_duration_minutes,
        )
        return [b for b in bookings if in_window(b.date, start, end)]


class SalonApiAvailabilityStore(AvailabilityStorePort):
    def __init__(self, client: SalonApiClient) -> None:
        self._client = client

    def list_blocks(self, start: date | None = None, end: date | None = None) -> list[UnavailabilityBlock]:
        blocks = parse_blocks(self._client.fetch_list("availability"))
        return [b for b in blocks if in_window(b.date, start, end)]
