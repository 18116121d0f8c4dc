"""
Tests for assembling the availability snapshot from the stores.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.application.use_cases.load_snapshot import LoadSnapshotUseCase, prune_expired_blocks
from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.slot import Slot
from app.domain.entities.staff import StaffMember
from app.domain.entities.unavailability import UnavailabilityBlock
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_store import (
    MemoryAppointmentStore,
    MemoryAvailabilityStore,
    MemoryStaffRoster,
)

TODAY = date(2026, 3, 10)


def _loader(catalog: ServiceCatalogStore, blocks: MemoryAvailabilityStore | None = None) -> LoadSnapshotUseCase:
    appointments = MemoryAppointmentStore(
        [
            Booking("a1", TODAY, Slot.at(9), 30, "anna"),
            Booking("a2", date(2026, 3, 20), Slot.at(9), 30, "anna"),
        ]
    )
    return LoadSnapshotUseCase(
        appointments=appointments,
        blocks=blocks or MemoryAvailabilityStore(),
        catalog=catalog,
        roster=MemoryStaffRoster([StaffMember("anna", "Anna")]),
        fallback_catalog=ServiceCatalogStore(),
    )


def test_prune_expired_blocks():
    blocks = [
        UnavailabilityBlock(date(2026, 3, 9), Slot.at(12)),
        UnavailabilityBlock(TODAY, Slot.at(12)),
        UnavailabilityBlock(date(2026, 3, 11), Slot.at(12)),
    ]
    assert [b.date for b in prune_expired_blocks(blocks, TODAY)] == [TODAY, date(2026, 3, 11)]


def test_snapshot_only_holds_the_requested_window():
    context = _loader(ServiceCatalogStore()).execute(TODAY, TODAY, today=TODAY)
    assert [b.booking_id for b in context.bookings] == ["a1"]
    assert [m.staff_id for m in context.staff] == ["anna"]
    assert {s.service_id for s in context.services} == {"manicure", "pedicure", "lashes", "tinting"}


def test_snapshot_drops_blocks_before_today():
    blocks = MemoryAvailabilityStore(
        [
            UnavailabilityBlock(date(2026, 3, 9), Slot.at(12)),
            UnavailabilityBlock(TODAY, Slot.at(13)),
        ]
    )
    context = _loader(ServiceCatalogStore(), blocks).execute(date(2026, 3, 1), date(2026, 3, 31), today=TODAY)
    assert [b.start for b in context.blocks] == [Slot.at(13)]


def test_fallback_catalog_when_no_active_services():
    retired = ServiceCatalogStore({"waxing": ServiceDefinition("waxing", "Waxing", 15, Decimal("90"), is_active=False)})
    context = _loader(retired).execute(TODAY, TODAY, today=TODAY)
    assert "manicure" in {s.service_id for s in context.services}


def test_active_catalog_is_used_as_is():
    own = ServiceCatalogStore({"brows": ServiceDefinition("brows", "Brows", 15, Decimal("60"))})
    context = _loader(own).execute(TODAY, TODAY, today=TODAY)
    assert [s.service_id for s in context.services] == ["brows"]


def test_memory_availability_store_add_and_remove():
    store = MemoryAvailabilityStore()
    block = UnavailabilityBlock(TODAY, Slot.at(12), "anna", "Break")
    store.add(block)
    assert store.list_blocks(TODAY, TODAY) == [block]
    assert store.remove(block)
    assert not store.remove(block)
    assert store.list_blocks() == []


def test_fallback_catalog_lookup_is_case_insensitive():
    catalog = ServiceCatalogStore()
    assert catalog.get_service(" Manicure ").duration_minutes == 45
    assert catalog.get_service("pedicure").price == Decimal("100")
    assert catalog.get_service("massage") is None


class RecordingAppointmentStore(MemoryAppointmentStore):
    def __init__(self, bookings=()):
        super().__init__(bookings)
        self.priced_with = None

    def list_bookings(self, start=None, end=None, services=None):
        self.priced_with = services
        return super().list_bookings(start, end, services)


class CountingCatalog(ServiceCatalogStore):
    def __init__(self, catalog=None):
        super().__init__(catalog)
        self.calls = 0

    def list_services(self):
        self.calls += 1
        return super().list_services()


def test_catalog_is_read_once_and_shared_with_the_appointment_store():
    appointments = RecordingAppointmentStore()
    catalog = CountingCatalog()
    loader = LoadSnapshotUseCase(
        appointments=appointments,
        blocks=MemoryAvailabilityStore(),
        catalog=catalog,
        roster=MemoryStaffRoster(),
        fallback_catalog=ServiceCatalogStore(),
    )
    loader.execute(TODAY, TODAY, today=TODAY)
    assert catalog.calls == 1
    assert {s.service_id for s in appointments.priced_with} == {"manicure", "pedicure", "lashes", "tinting"}


def test_inactive_upstream_services_still_price_bookings():
    appointments = RecordingAppointmentStore()
    retired = ServiceCatalogStore({"waxing": ServiceDefinition("waxing", "Waxing", 15, Decimal("90"), is_active=False)})
    loader = LoadSnapshotUseCase(
        appointments=appointments,
        blocks=MemoryAvailabilityStore(),
        catalog=retired,
        roster=MemoryStaffRoster(),
        fallback_catalog=ServiceCatalogStore(),
    )
    context = loader.execute(TODAY, TODAY, today=TODAY)
    assert [s.service_id for s in appointments.priced_with] == ["waxing"]
    assert "waxing" not in {s.service_id for s in context.services}


def test_load_services_applies_fallback():
    retired = ServiceCatalogStore({"waxing": ServiceDefinition("waxing", "Waxing", 15, Decimal("90"), is_active=False)})
    assert "manicure" in {s.service_id for s in _loader(retired).load_services()}
    own = ServiceCatalogStore({"brows": ServiceDefinition("brows", "Brows", 15, Decimal("60"))})
    assert [s.service_id for s in _loader(own).load_services()] == ["brows"]
