from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from app.domain.entities.slot import Slot


class BookingStatus(str, Enum):
    BOOKED = "booked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


@dataclass(frozen=True)
class Booking:
    booking_id: str
    date: date
    start: Slot
    duration_minutes: int
    staff_id: str | None
    status: BookingStatus = BookingStatus.BOOKED
    client_name: str | None = None
    service_ids: tuple[str, ...] = ()


def is_occupying(booking: Booking) -> bool:
    """Only cancelled bookings release their slots."""
    return booking.status != BookingStatus.CANCELLED
