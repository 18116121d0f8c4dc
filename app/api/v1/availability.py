from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from app.api.v1.schemas import (
    BookabilityResponseSchema,
    DaySlotsResponseSchema,
    FullyBookedResponseSchema,
    MonthOverviewResponseSchema,
    RunPositionSchema,
    ServiceSchema,
    ServicesResponseSchema,
    SlotViewSchema,
)
from app.application.exceptions import InvalidDurationError, MalformedTimeError, UpstreamStoreError
from app.application.use_cases.availability import AvailabilityEngine
from app.application.use_cases.load_snapshot import LoadSnapshotUseCase
from app.application.use_cases.slot_presenter import SlotPresenter
from app.application.utils.date_range import iter_dates, month_bounds
from app.application.utils.duration import DurationResolver, required_slot_count
from app.application.utils.time_grid import TimeGrid
from app.wiring.dependencies import get_now, get_snapshot_loader, get_time_grid, get_timezone

router = APIRouter()
logger = logging.getLogger(__name__)


def _build_engine(
    loader: LoadSnapshotUseCase,
    grid: TimeGrid,
    tz: ZoneInfo,
    start: date,
    end: date,
    now: datetime,
) -> AvailabilityEngine:
    try:
        context = loader.execute(start, end, today=now.astimezone(tz).date())
    except UpstreamStoreError as e:
        logger.error("Snapshot load failed", extra={"date": start.isoformat(), "error": str(e)})
        raise HTTPException(status_code=502, detail="Salon data is temporarily unavailable")
    return AvailabilityEngine(context, grid, tz)


def _total_minutes(engine: AvailabilityEngine, service_ids: list[str], duration_minutes: int | None) -> int | None:
    if duration_minutes is not None:
        return duration_minutes
    if not service_ids:
        return None
    return DurationResolver(engine.context.services).total_minutes(service_ids)


def _bad_request(e: MalformedTimeError | InvalidDurationError, day: date) -> HTTPException:
    logger.warning("Rejected availability query", extra={"date": day.isoformat(), "reason": e.kind.value, "error": str(e)})
    return HTTPException(status_code=400, detail=str(e))


@router.get("/services", response_model=ServicesResponseSchema)
def selectable_services(
    loader: LoadSnapshotUseCase = Depends(get_snapshot_loader),
    grid: TimeGrid = Depends(get_time_grid),
):
    try:
        services = loader.load_services()
    except UpstreamStoreError as e:
        logger.error("Service catalog load failed", extra={"resource": "services", "error": str(e)})
        raise HTTPException(status_code=502, detail="Salon data is temporarily unavailable")

    return ServicesResponseSchema(
        services=[
            ServiceSchema(
                service_id=s.service_id,
                name=s.display_name,
                duration_minutes=s.duration_minutes,
                slot_count=required_slot_count(s.duration_minutes, grid.interval_minutes),
                price=s.price,
            )
            for s in DurationResolver(services).selectable_services()
        ]
    )


@router.get("/{day}/slots", response_model=DaySlotsResponseSchema)
def day_slots(
    day: date,
    staff_id: str | None = None,
    service_ids: list[str] | None = Query(default=None),
    duration_minutes: int | None = None,
    selected_time: str | None = None,
    loader: LoadSnapshotUseCase = Depends(get_snapshot_loader),
    grid: TimeGrid = Depends(get_time_grid),
    tz: ZoneInfo = Depends(get_timezone),
    now: datetime = Depends(get_now),
):
    engine = _build_engine(loader, grid, tz, day, day, now)
    total = _total_minutes(engine, service_ids or [], duration_minutes)
    try:
        views = SlotPresenter(engine).present_day(
            day,
            staff_id=staff_id,
            total_minutes=total,
            selected_start=selected_time,
            now=now,
        )
    except (MalformedTimeError, InvalidDurationError) as e:
        raise _bad_request(e, day)

    return DaySlotsResponseSchema(
        date=day,
        staff_id=staff_id,
        total_duration_minutes=total,
        date_in_past=engine.is_date_in_past(day, now),
        fully_booked=engine.is_date_fully_booked(day, staff_id),
        slots=[
            SlotViewSchema(
                time=view.slot.time24,
                display=view.display,
                state=view.state,
                label=view.label,
                clickable=view.clickable,
                position=(
                    RunPositionSchema(
                        position=view.position.position,
                        total=view.position.total,
                        is_first=view.position.is_first,
                        is_last=view.position.is_last,
                    )
                    if view.position
                    else None
                ),
            )
            for view in views
        ],
    )


@router.get("/{day}/check", response_model=BookabilityResponseSchema)
def check_slot(
    day: date,
    start_time: str,
    staff_id: str | None = None,
    service_ids: list[str] | None = Query(default=None),
    duration_minutes: int | None = None,
    loader: LoadSnapshotUseCase = Depends(get_snapshot_loader),
    grid: TimeGrid = Depends(get_time_grid),
    tz: ZoneInfo = Depends(get_timezone),
    now: datetime = Depends(get_now),
):
    engine = _build_engine(loader, grid, tz, day, day, now)
    total = _total_minutes(engine, service_ids or [], duration_minutes) or 0
    try:
        decision = engine.is_bookable(day, start_time, total, staff_id, now)
    except (MalformedTimeError, InvalidDurationError) as e:
        raise _bad_request(e, day)

    return BookabilityResponseSchema(
        date=day,
        start_time=start_time,
        staff_id=staff_id,
        total_duration_minutes=total,
        bookable=decision.bookable,
        reason=decision.reason,
        run=[slot.time24 for slot in decision.run],
    )


@router.get("/{day}/fully-booked", response_model=FullyBookedResponseSchema)
def fully_booked(
    day: date,
    staff_id: str | None = None,
    loader: LoadSnapshotUseCase = Depends(get_snapshot_loader),
    grid: TimeGrid = Depends(get_time_grid),
    tz: ZoneInfo = Depends(get_timezone),
    now: datetime = Depends(get_now),
):
    engine = _build_engine(loader, grid, tz, day, day, now)
    return FullyBookedResponseSchema(
        date=day,
        staff_id=staff_id,
        fully_booked=engine.is_date_fully_booked(day, staff_id),
        fully_booked_staff=engine.fully_booked_staff(day),
    )


@router.get("/month/{year}/{month}", response_model=MonthOverviewResponseSchema)
def month_overview(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    staff_id: str | None = None,
    loader: LoadSnapshotUseCase = Depends(get_snapshot_loader),
    grid: TimeGrid = Depends(get_time_grid),
    tz: ZoneInfo = Depends(get_timezone),
    now: datetime = Depends(get_now),
):
    first, last = month_bounds(year, month)
    engine = _build_engine(loader, grid, tz, first, last, now)
    days = list(iter_dates(first, last))
    return MonthOverviewResponseSchema(
        year=year,
        month=month,
        staff_id=staff_id,
        fully_booked_dates=engine.fully_booked_dates(days, staff_id),
        past_dates=[day for day in days if engine.is_date_in_past(day, now)],
    )
