"""Read-only calendar queries: academic year, rotation week, school days."""
from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, owner_id
from app.config import settings
from app.models.academic_year import AcademicYearOut
from app.services.academic_calendar import (
    CalendarDay,
    cycle_length_for,
    describe_day,
    describe_range,
    resolve_academic_year,
)
from app.services.academic_year import list_academic_years, list_holidays

router = APIRouter()


@router.get("/resolve", response_model=Optional[AcademicYearOut])
async def resolve_year(user: CurrentUser, day: Optional[date] = Query(None, alias="date")):
    """Academic year containing the date, or null when none is configured."""
    years = await list_academic_years(owner_id(user))
    return resolve_academic_year(day or date.today(), years)


@router.get("/week", response_model=CalendarDay)
async def week_info(user: CurrentUser, day: Optional[date] = Query(None, alias="date")):
    """Rotation week and school-day status for one date (today by default)."""
    years = await list_academic_years(owner_id(user))
    holidays = await list_holidays(owner_id(user))
    return describe_day(
        day or date.today(),
        years,
        holidays,
        cycle_length=cycle_length_for(user.timetable_cycle),
        policy=settings.holiday_week_policy,
    )


@router.get("/days", response_model=List[CalendarDay])
async def calendar_days(user: CurrentUser, start: date, end: Optional[date] = None):
    """Per-day calendar information for a range (one week when ``end`` is omitted)."""
    end = end or start + timedelta(days=6)
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    if (end - start).days + 1 > settings.calendar_max_range_days:
        raise HTTPException(
            status_code=400,
            detail=f"Range is limited to {settings.calendar_max_range_days} days",
        )
    years = await list_academic_years(owner_id(user))
    holidays = await list_holidays(owner_id(user))
    return describe_range(
        start,
        end,
        years,
        holidays,
        cycle_length=cycle_length_for(user.timetable_cycle),
        policy=settings.holiday_week_policy,
    )
