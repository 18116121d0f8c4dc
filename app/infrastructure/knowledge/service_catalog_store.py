from __future__ import annotations

from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.service_catalog import ServiceDefinition
from app.infrastructure.knowledge.service_catalog_data import DEFAULT_SERVICES


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, catalog: dict[str, ServiceDefinition] | None = None) -> None:
        self._catalog = catalog if catalog is not None else DEFAULT_SERVICES

    def list_services(self) -> list[ServiceDefinition]:
        return list(self._catalog.values())

    def get_service(self, service_id: str) -> ServiceDefinition | None:
        normalized_id = service_id.strip()
        return self._catalog.get(normalized_id) or self._catalog.get(normalized_id.lower())
