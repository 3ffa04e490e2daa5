"""Academic years: CRUD, activation, cascading delete."""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.academic_year import AcademicYear, AcademicYearCreate, AcademicYearOut, AcademicYearUpdate
from app.models.holiday import Holiday
from app.services.academic_calendar import active_academic_year
from app.services.academic_year import (
    activate_academic_year,
    delete_academic_year,
    find_overlapping_year,
    get_owned_year,
    insert_academic_year,
    list_academic_years,
    year_to_out,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_year(user: CurrentUser, year_id: str) -> AcademicYear:
    year = await get_owned_year(owner_id(user), parse_object_id(year_id, "Academic year"))
    if not year:
        raise HTTPException(status_code=404, detail="Academic year not found")
    return year


async def _ensure_no_overlap(user_id: str, data, exclude_id=None) -> None:
    clash = await find_overlapping_year(user_id, data.start_date, data.end_date, exclude_id=exclude_id)
    if clash:
        logger.warning("Rejected academic year for user %s overlapping %s", user_id, clash.id)
        raise HTTPException(
            status_code=409,
            detail=f"Dates overlap the academic year '{clash.name}'",
        )


@router.get("/", response_model=List[AcademicYearOut])
async def list_years(user: CurrentUser):
    """List the caller's academic years, earliest first."""
    return await list_academic_years(owner_id(user))


@router.post("/", response_model=AcademicYearOut, status_code=201)
async def create_year(data: AcademicYearCreate, user: CurrentUser):
    user_id = owner_id(user)
    await _ensure_no_overlap(user_id, data)
    year = AcademicYear(user_id=user_id, **data.model_dump())
    await insert_academic_year(year)
    return year_to_out(year)


@router.get("/active", response_model=Optional[AcademicYearOut])
async def get_active_year(user: CurrentUser):
    """The year marked active, or null before setup is finished."""
    return active_academic_year(await list_academic_years(owner_id(user)))


@router.get("/{year_id}", response_model=AcademicYearOut)
async def get_year(year_id: str, user: CurrentUser):
    return year_to_out(await _load_year(user, year_id))


@router.patch("/{year_id}", response_model=AcademicYearOut)
async def update_year(year_id: str, data: AcademicYearUpdate, user: CurrentUser):
    year = await _load_year(user, year_id)
    changes = data.model_dump(exclude_unset=True)
    activate = changes.pop("is_active", None)

    # Re-validate the merged record with the create rules
    merged = year.model_dump(include=set(AcademicYearCreate.model_fields)) | changes
    merged["is_active"] = False
    try:
        checked = AcademicYearCreate(**merged)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await _ensure_no_overlap(year.user_id, checked, exclude_id=year.id)

    for key, value in checked.model_dump(exclude={"is_active"}).items():
        setattr(year, key, value)
    year.updated_at = datetime.utcnow()
    if activate is True and not year.is_active:
        await activate_academic_year(year)
    else:
        if activate is False:
            year.is_active = False
        await year.save()
    return year_to_out(year)


@router.post("/{year_id}/activate", response_model=AcademicYearOut)
async def activate_year(year_id: str, user: CurrentUser):
    year = await _load_year(user, year_id)
    await activate_academic_year(year)
    return year_to_out(year)


@router.delete("/{year_id}")
async def delete_year(year_id: str, user: CurrentUser):
    """Delete an academic year together with its holidays."""
    year = await _load_year(user, year_id)
    removed = await delete_academic_year(year)
    return {"message": "Academic year deleted", "holidays_deleted": removed}


@router.get("/{year_id}/holidays/count")
async def count_year_holidays(year_id: str, user: CurrentUser):
    """How many holidays a delete would remove; shown in the confirmation dialog."""
    year = await _load_year(user, year_id)
    count = await Holiday.find(Holiday.academic_year_id == str(year.id), Holiday.user_id == year.user_id).count()
    return {"academic_year_id": str(year.id), "holidays": count}
