from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.application.utils.duration import DEFAULT_BOOKING_DURATION_MINUTES, DurationResolver
from app.application.utils.time_grid import parse_slot
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.staff import StaffMember
from app.domain.entities.unavailability import ALL_STAFF, UnavailabilityBlock

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

STATUS_ALIASES = {
    "booked": BookingStatus.BOOKED,
    "confirmed": BookingStatus.BOOKED,
    "pending": BookingStatus.BOOKED,
    "completed": BookingStatus.COMPLETED,
    "cancelled": BookingStatus.CANCELLED,
    "canceled": BookingStatus.CANCELLED,
    "no-show": BookingStatus.NO_SHOW,
    "no_show": BookingStatus.NO_SHOW,
    "noshow": BookingStatus.NO_SHOW,
}


def parse_record_date(value: str | date) -> date:
    """ISO calendar date, or an ISO datetime reduced to its UTC calendar date."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        text = str(value).strip()
        if ISO_DATE_PATTERN.match(text):
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def _as_id(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class _RecordDTO(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    record_id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))

    @field_validator("record_id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        return _as_id(value)


class ServiceRecordDTO(_RecordDTO):
    name: str = ""
    duration_minutes: int | None = Field(
        default=None, validation_alias=AliasChoices("durationMinutes", "duration_minutes", "duration")
    )
    price: Decimal = Decimal("0")
    is_active: bool = Field(default=True, validation_alias=AliasChoices("isActive", "is_active"))

    @field_validator("price", mode="before")
    @classmethod
    def _unwrap_decimal(cls, value: Any) -> Any:
        # Mongo exports decimals as {"$numberDecimal": "150.00"}
        if isinstance(value, dict):
            value = value.get("$numberDecimal")
        if value in (None, ""):
            return Decimal("0")
        try:
            return Decimal(str(value))
        except InvalidOperation:
            return Decimal("0")

    @field_validator("is_active", mode="before")
    @classmethod
    def _default_active(cls, value: Any) -> Any:
        return True if value is None else value

    def to_domain(self) -> ServiceDefinition:
        if not self.record_id:
            raise ValueError("service record has no id")
        if not self.duration_minutes or self.duration_minutes <= 0:
            raise ValueError(f"service {self.record_id} has no positive duration")
        return ServiceDefinition(
            service_id=self.record_id,
            display_name=self.name or self.record_id,
            duration_minutes=self.duration_minutes,
            price=self.price,
            is_active=self.is_active,
        )


class AppointmentRecordDTO(_RecordDTO):
    date: str
    start_time: str = Field(validation_alias=AliasChoices("startTime", "start_time", "time"))
    total_duration_minutes: int | None = Field(
        default=None,
        validation_alias=AliasChoices("totalDurationMinutes", "totalDuration", "durationMinutes", "duration"),
    )
    employee_id: str | None = Field(default=None, validation_alias=AliasChoices("employeeId", "employee_id", "staffId"))
    status: str = "booked"
    service_ids: list[str] = Field(default_factory=list, validation_alias=AliasChoices("serviceIds", "service_ids"))
    client_name: str | None = Field(default=None, validation_alias=AliasChoices("clientName", "userName"))

    @field_validator("total_duration_minutes", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> int | None:
        # Blank, non-numeric or non-positive totals fall back to the service sum.
        if isinstance(value, bool) or value in (None, ""):
            return None
        try:
            minutes = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(minutes) or minutes <= 0:
            return None
        return math.ceil(minutes)

    @field_validator("employee_id", mode="before")
    @classmethod
    def _coerce_employee(cls, value: Any) -> str | None:
        return _as_id(value)

    @field_validator("service_ids", mode="before")
    @classmethod
    def _coerce_service_ids(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(v) for v in value if v is not None]

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> str:
        return str(value or "booked")

    def to_domain(
        self,
        resolver: DurationResolver,
        default_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
    ) -> Booking:
        return Booking(
            booking_id=self.record_id or "",
            date=parse_record_date(self.date),
            start=parse_slot(self.start_time),
            duration_minutes=resolver.booking_duration(self.total_duration_minutes, self.service_ids, default_minutes),
            staff_id=self.employee_id,
            status=STATUS_ALIASES.get(self.status.strip().lower(), BookingStatus.BOOKED),
            client_name=self.client_name,
            service_ids=tuple(self.service_ids),
        )


class BlockRecordDTO(_RecordDTO):
    date: str
    start_time: str = Field(validation_alias=AliasChoices("startTime", "start_time", "time"))
    employee_id: str | None = Field(
        default=ALL_STAFF, validation_alias=AliasChoices("employeeId", "employee_id", "stylist")
    )
    reason: str = ""

    @field_validator("employee_id", mode="before")
    @classmethod
    def _coerce_employee(cls, value: Any) -> str:
        staff_id = _as_id(value)
        if staff_id is None or staff_id.upper() == ALL_STAFF:
            return ALL_STAFF
        return staff_id

    def to_domain(self) -> UnavailabilityBlock:
        return UnavailabilityBlock(
            date=parse_record_date(self.date),
            start=parse_slot(self.start_time),
            staff_id=self.employee_id or ALL_STAFF,
            reason=self.reason,
            block_id=self.record_id,
        )


class StaffRecordDTO(_RecordDTO):
    name: str = ""
    is_active: bool = Field(default=True, validation_alias=AliasChoices("isActive", "is_active"))

    @field_validator("is_active", mode="before")
    @classmethod
    def _default_active(cls, value: Any) -> Any:
        return True if value is None else value

    def to_domain(self) -> StaffMember:
        if not self.record_id:
            raise ValueError("staff record has no id")
        return StaffMember(staff_id=self.record_id, name=self.name or self.record_id, is_active=self.is_active)


def _skip(kind: str, item: Any, error: Exception) -> None:
    record_id = item.get("_id") or item.get("id") if isinstance(item, dict) else None
    logger.warning(
        "Skipping malformed %s record",
        kind,
        extra={"record_id": record_id, "error": str(error)},
    )


def parse_services(items: list[dict[str, Any]]) -> list[ServiceDefinition]:
    services: list[ServiceDefinition] = []
    for item in items or []:
        try:
            services.append(ServiceRecordDTO.model_validate(item).to_domain())
        except (ValidationError, ValueError) as e:
            _skip("service", item, e)
    return services


def parse_staff(items: list[dict[str, Any]]) -> list[StaffMember]:
    staff: list[StaffMember] = []
    for item in items or []:
        try:
            staff.append(StaffRecordDTO.model_validate(item).to_domain())
        except (ValidationError, ValueError) as e:
            _skip("staff", item, e)
    return staff


def parse_appointments(
    items: list[dict[str, Any]],
    resolver: DurationResolver,
    default_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
) -> list[Booking]:
    bookings: list[Booking] = []
    for item in items or []:
        try:
            bookings.append(AppointmentRecordDTO.model_validate(item).to_domain(resolver, default_minutes))
        except (ValidationError, ValueError) as e:
            _skip("appointment", item, e)
    return bookings


def parse_blocks(items: list[dict[str, Any]]) -> list[UnavailabilityBlock]:
    blocks: list[UnavailabilityBlock] = []
    for item in items or []:
        try:
            blocks.append(BlockRecordDTO.model_validate(item).to_domain())
        except (ValidationError, ValueError) as e:
            _skip("block", item, e)
    return blocks
