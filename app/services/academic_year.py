"""Loading and mutating a user's academic years and holidays.

Multi-record writes (activating a year, deleting a year with its holidays)
run inside one MongoDB transaction.
"""
import logging
from datetime import date, datetime
from typing import Optional

from beanie import PydanticObjectId

from app.db import transaction
from app.models.academic_year import AcademicYear, AcademicYearOut
from app.models.holiday import Holiday, HolidayOut

logger = logging.getLogger(__name__)


def year_to_out(year: AcademicYear) -> AcademicYearOut:
    return AcademicYearOut(**year.model_dump(exclude={"id", "revision_id"}), id=str(year.id))


def holiday_to_out(holiday: Holiday) -> HolidayOut:
    return HolidayOut(**holiday.model_dump(exclude={"id", "revision_id"}), id=str(holiday.id))


async def list_academic_years(user_id: str) -> list[AcademicYearOut]:
    years = await AcademicYear.find(AcademicYear.user_id == user_id).sort("start_date").to_list()
    return [year_to_out(y) for y in years]


async def list_holidays(user_id: str, academic_year_id: Optional[str] = None) -> list[HolidayOut]:
    query = {"user_id": user_id}
    if academic_year_id:
        query["academic_year_id"] = academic_year_id
    holidays = await Holiday.find(query).sort("start_date").to_list()
    return [holiday_to_out(h) for h in holidays]


async def get_owned_year(user_id: str, year_id: PydanticObjectId) -> Optional[AcademicYear]:
    return await AcademicYear.find_one(AcademicYear.id == year_id, AcademicYear.user_id == user_id)


async def find_overlapping_year(
    user_id: str,
    start: date,
    end: date,
    exclude_id: Optional[PydanticObjectId] = None,
) -> Optional[AcademicYear]:
    """Another year of this user whose range shares at least one day with [start, end]."""
    query = {
        "user_id": user_id,
        "start_date": {"$lte": end},
        "end_date": {"$gte": start},
    }
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return await AcademicYear.find_one(query)


async def activate_academic_year(year: AcademicYear) -> AcademicYear:
    """Make ``year`` the user's only active year."""
    async with transaction() as session:
        await AcademicYear.find(
            AcademicYear.user_id == year.user_id,
            AcademicYear.id != year.id,
            session=session,
        ).update({"$set": {"is_active": False}}, session=session)
        year.is_active = True
        year.updated_at = datetime.utcnow()
        await year.save(session=session)
    logger.info("Activated academic year %s for user %s", year.id, year.user_id)
    return year


async def insert_academic_year(year: AcademicYear) -> AcademicYear:
    if not year.is_active:
        await year.insert()
        return year
    async with transaction() as session:
        await AcademicYear.find(
            AcademicYear.user_id == year.user_id,
            session=session,
        ).update({"$set": {"is_active": False}}, session=session)
        await year.insert(session=session)
    logger.info("Created active academic year %s for user %s", year.id, year.user_id)
    return year


async def delete_academic_year(year: AcademicYear) -> int:
    """Delete ``year`` and its holidays together. Returns the number of holidays removed."""
    async with transaction() as session:
        result = await Holiday.find(
            Holiday.academic_year_id == str(year.id),
            Holiday.user_id == year.user_id,
            session=session,
        ).delete(session=session)
        await year.delete(session=session)
    removed = result.deleted_count if result else 0
    logger.info("Deleted academic year %s for user %s with %d holidays", year.id, year.user_id, removed)
    return removed
