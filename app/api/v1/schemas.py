import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from app.domain.entities.availability import ErrorKind, SlotState


class RunPositionSchema(BaseModel):
    position: int
    total: int
    is_first: bool
    is_last: bool


class SlotViewSchema(BaseModel):
    time: str
    display: str
    state: SlotState
    label: str | None = None
    clickable: bool
    position: RunPositionSchema | None = None


class DaySlotsResponseSchema(BaseModel):
    date: dt.date
    staff_id: str | None = None
    total_duration_minutes: int | None = None
    date_in_past: bool
    fully_booked: bool
    slots: list[SlotViewSchema] = Field(default_factory=list)


class BookabilityResponseSchema(BaseModel):
    date: dt.date
    start_time: str
    staff_id: str | None = None
    total_duration_minutes: int
    bookable: bool
    reason: ErrorKind | None = None
    run: list[str] = Field(default_factory=list)


class FullyBookedResponseSchema(BaseModel):
    date: dt.date
    staff_id: str | None = None
    fully_booked: bool
    fully_booked_staff: list[str] = Field(default_factory=list)


class MonthOverviewResponseSchema(BaseModel):
    year: int
    month: int
    staff_id: str | None = None
    fully_booked_dates: list[dt.date] = Field(default_factory=list)
    past_dates: list[dt.date] = Field(default_factory=list)


class ServiceSchema(BaseModel):
    service_id: str
    name: str
    duration_minutes: int
    slot_count: int
    price: Decimal


class ServicesResponseSchema(BaseModel):
    services: list[ServiceSchema] = Field(default_factory=list)
