from __future__ import annotations

import math
from collections.abc import Iterable

from app.application.exceptions import InvalidDurationError
from app.domain.entities.service_catalog import ServiceDefinition

DEFAULT_BOOKING_DURATION_MINUTES = 60


def validate_duration(total_minutes: float) -> float:
    """Reject non-positive and non-finite durations before any slot arithmetic."""
    if isinstance(total_minutes, bool) or not isinstance(total_minutes, (int, float)):
        raise InvalidDurationError(total_minutes)
    if not math.isfinite(total_minutes) or total_minutes <= 0:
        raise InvalidDurationError(total_minutes)
    return total_minutes


def required_slot_count(total_minutes: float, interval_minutes: int) -> int:
    """ceil(total / interval), never less than one slot."""
    return max(1, math.ceil(total_minutes / interval_minutes))


class DurationResolver:
    """Totals service durations against a catalog snapshot."""

    def __init__(self, services: Iterable[ServiceDefinition]) -> None:
        self._services = {s.service_id: s for s in services}

    def total_minutes(self, service_ids: Iterable[str]) -> int:
        # Unknown ids contribute nothing so a stale client catalog still resolves.
        return sum(
            self._services[service_id].duration_minutes
            for service_id in service_ids
            if service_id in self._services
        )

    def selectable_services(self) -> list[ServiceDefinition]:
        return [s for s in self._services.values() if s.is_active]

    def booking_duration(
        self,
        total_minutes: int | None,
        service_ids: Iterable[str] = (),
        default_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
    ) -> int:
        """Explicit total, else the sum of its services, else the fallback."""
        if total_minutes:
            return total_minutes
        return self.total_minutes(service_ids) or default_minutes
