from __future__ import annotations

from decimal import Decimal

from app.domain.entities.service_catalog import ServiceDefinition

# Fallback catalog used when the salon backend has no services to offer.
DEFAULT_SERVICES: dict[str, ServiceDefinition] = {
    "manicure": ServiceDefinition("manicure", "Manicure", 45, Decimal("150")),
    "pedicure": ServiceDefinition("pedicure", "Pedicure", 30, Decimal("100")),
    "lashes": ServiceDefinition("lashes", "Lashes", 30, Decimal("120")),
    "tinting": ServiceDefinition("tinting", "Tinting", 30, Decimal("80")),
}
