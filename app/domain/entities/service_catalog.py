from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ServiceDefinition:
    service_id: str
    display_name: str
    duration_minutes: int
    price: Decimal = Decimal("0")
    is_active: bool = True
