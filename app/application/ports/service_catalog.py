from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceDefinition


class ServiceCatalogPort(ABC):
    @abstractmethod
    def list_services(self) -> list[ServiceDefinition]:
        """All services, inactive ones included (historical bookings still resolve)."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> ServiceDefinition | None:
        """Get service by id."""
        raise NotImplementedError
