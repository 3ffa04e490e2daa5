import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.academic_year import AcademicYear
from app.models.holiday import Holiday, HolidayCreate, HolidayOut, HolidayUpdate
from app.services.academic_calendar import holidays_in_range
from app.services.academic_year import get_owned_year, holiday_to_out, list_holidays

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_within_year(year: AcademicYear, start, end) -> None:
    if end < start:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    if start < year.start_date or end > year.end_date:
        raise HTTPException(
            status_code=400,
            detail=f"Holiday must fall within {year.name} ({year.start_date} to {year.end_date})",
        )


async def _load_holiday(user: CurrentUser, holiday_id: str) -> Holiday:
    object_id = parse_object_id(holiday_id, "Holiday")
    holiday = await Holiday.find_one(
        Holiday.id == object_id,
        Holiday.user_id == owner_id(user),
    )
    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")
    return holiday


@router.get("/", response_model=List[HolidayOut])
async def list_user_holidays(
    user: CurrentUser,
    academic_year_id: Optional[str] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
):
    """List holidays, optionally for one academic year and touching [start, end]."""
    holidays = await list_holidays(owner_id(user), academic_year_id)
    if start or end:
        holidays = holidays_in_range(start or date.min, end or date.max, holidays)
    return holidays


@router.post("/", response_model=HolidayOut, status_code=201)
async def create_holiday(data: HolidayCreate, user: CurrentUser):
    year = await get_owned_year(owner_id(user), parse_object_id(data.academic_year_id, "Academic year"))
    if not year:
        raise HTTPException(status_code=404, detail="Academic year not found")
    _check_within_year(year, data.start_date, data.end_date)

    holiday = Holiday(
        user_id=owner_id(user),
        academic_year_id=str(year.id),
        name=data.name,
        start_date=data.start_date,
        end_date=data.end_date,
        type=data.type,
        color=data.color or data.type.default_color,
    )
    await holiday.insert()
    logger.info("Created holiday %s in academic year %s", holiday.id, year.id)
    return holiday_to_out(holiday)


@router.get("/{holiday_id}", response_model=HolidayOut)
async def get_holiday(holiday_id: str, user: CurrentUser):
    return holiday_to_out(await _load_holiday(user, holiday_id))


@router.patch("/{holiday_id}", response_model=HolidayOut)
async def update_holiday(holiday_id: str, data: HolidayUpdate, user: CurrentUser):
    holiday = await _load_holiday(user, holiday_id)
    update_data = data.model_dump(exclude_unset=True)

    start = update_data.get("start_date", holiday.start_date)
    end = update_data.get("end_date", holiday.end_date)
    if "start_date" in update_data or "end_date" in update_data:
        year = await get_owned_year(holiday.user_id, parse_object_id(holiday.academic_year_id, "Academic year"))
        if not year:
            raise HTTPException(status_code=404, detail="Academic year not found")
        _check_within_year(year, start, end)

    if update_data.get("type") and "color" not in update_data and holiday.color == holiday.type.default_color:
        # Follow the new type's colour unless the user picked one
        update_data["color"] = update_data["type"].default_color

    for key, value in update_data.items():
        setattr(holiday, key, value)
    holiday.updated_at = datetime.utcnow()
    await holiday.save()
    return holiday_to_out(holiday)


@router.delete("/{holiday_id}", status_code=204)
async def delete_holiday(holiday_id: str, user: CurrentUser):
    holiday = await _load_holiday(user, holiday_id)
    await holiday.delete()
    return None
