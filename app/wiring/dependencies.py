from datetime import datetime
from functools import lru_cache
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.availability_store import AvailabilityStorePort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.staff_roster import StaffRosterPort
from app.application.use_cases.load_snapshot import LoadSnapshotUseCase
from app.application.utils.time_grid import TimeGrid
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.salon_api.salon_api_client import SalonApiClient
from app.infrastructure.salon_api.salon_api_stores import (
    SalonApiAppointmentStore,
    SalonApiAvailabilityStore,
    SalonApiServiceCatalog,
    SalonApiStaffRoster,
)
from app.infrastructure.store.memory_store import (
    MemoryAppointmentStore,
    MemoryAvailabilityStore,
    MemoryStaffRoster,
)


_memory_appointments: MemoryAppointmentStore | None = None
_memory_blocks: MemoryAvailabilityStore | None = None
_memory_roster: MemoryStaffRoster | None = None


def use_memory_stores() -> bool:
    return not settings.SALON_API_BASE_URL or settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_time_grid() -> TimeGrid:
    return TimeGrid(
        open_time=settings.SALON_OPEN_TIME,
        close_time=settings.SALON_CLOSE_TIME,
        interval_minutes=settings.SLOT_INTERVAL_MINUTES,
    )


@lru_cache
def get_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.SALON_TIMEZONE)
    except ZoneInfoNotFoundError:
        logger = logging.getLogger(__name__)
        logger.error("Invalid SALON_TIMEZONE, using UTC", extra={"error": settings.SALON_TIMEZONE})
        return ZoneInfo("UTC")


def get_now() -> datetime:
    return datetime.now(get_timezone())


@lru_cache
def get_salon_api_client() -> SalonApiClient:
    if not settings.SALON_API_BASE_URL:
        raise ValueError("SALON_API_BASE_URL is required for the salon API stores")
    return SalonApiClient(
        base_url=settings.SALON_API_BASE_URL,
        token=settings.SALON_API_TOKEN,
        timeout=settings.SALON_API_TIMEOUT_SECONDS,
    )


def get_service_catalog() -> ServiceCatalogPort:
    if use_memory_stores():
        return ServiceCatalogStore()
    return SalonApiServiceCatalog(get_salon_api_client())


def get_appointment_store(catalog: ServiceCatalogPort | None = None) -> AppointmentStorePort:
    global _memory_appointments
    if use_memory_stores():
        if _memory_appointments is None:
            _memory_appointments = MemoryAppointmentStore()
        return _memory_appointments
    return SalonApiAppointmentStore(
        get_salon_api_client(),
        catalog=catalog or get_service_catalog(),
        default_duration_minutes=settings.DEFAULT_BOOKING_DURATION_MINUTES,
    )


def get_availability_store() -> AvailabilityStorePort:
    global _memory_blocks
    if use_memory_stores():
        if _memory_blocks is None:
            _memory_blocks = MemoryAvailabilityStore()
        return _memory_blocks
    return SalonApiAvailabilityStore(get_salon_api_client())


def get_staff_roster() -> StaffRosterPort:
    global _memory_roster
    if use_memory_stores():
        if _memory_roster is None:
            _memory_roster = MemoryStaffRoster()
        return _memory_roster
    return SalonApiStaffRoster(get_salon_api_client())


def get_snapshot_loader() -> LoadSnapshotUseCase:
    catalog = get_service_catalog()
    return LoadSnapshotUseCase(
        appointments=get_appointment_store(catalog),
        blocks=get_availability_store(),
        catalog=catalog,
        roster=get_staff_roster(),
        fallback_catalog=ServiceCatalogStore(),
    )
