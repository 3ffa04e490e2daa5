"""Timetable slots (periods) and entries (what is taught when)."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, check_references, owner_id, parse_object_id
from app.config import settings
from app.models.lesson import Lesson
from app.models.timetable import (
    TimetableEntry,
    TimetableEntryCreate,
    TimetableEntryOut,
    TimetableEntryUpdate,
    TimetableSlot,
    TimetableSlotCreate,
    TimetableSlotUpdate,
)
from app.services.academic_calendar import cycle_length_for, describe_day
from app.services.academic_year import list_academic_years, list_holidays
from app.services.timetable import DaySchedule, entry_to_out, list_entries, schedule_for_day

router = APIRouter()
slots_router = APIRouter()


def _slot_out(s: TimetableSlot) -> dict:
    return {
        "id": str(s.id),
        "period": s.period,
        "week_number": s.week_number,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "label": s.label,
    }


async def _load_slot(user: CurrentUser, slot_id: str) -> TimetableSlot:
    object_id = parse_object_id(slot_id, "Timetable slot")
    slot = await TimetableSlot.find_one(
        TimetableSlot.id == object_id,
        TimetableSlot.user_id == owner_id(user),
    )
    if not slot:
        raise HTTPException(status_code=404, detail="Timetable slot not found")
    return slot


async def _load_entry(user: CurrentUser, entry_id: str) -> TimetableEntry:
    object_id = parse_object_id(entry_id, "Timetable entry")
    entry = await TimetableEntry.find_one(
        TimetableEntry.id == object_id,
        TimetableEntry.user_id == owner_id(user),
    )
    if not entry:
        raise HTTPException(status_code=404, detail="Timetable entry not found")
    return entry


@slots_router.get("/")
async def list_slots(user: CurrentUser, week_number: Optional[int] = Query(None, ge=1, le=2)):
    query = {"user_id": owner_id(user)}
    if week_number:
        query["week_number"] = week_number
    slots = await TimetableSlot.find(query).sort("period", "week_number").to_list()
    return [_slot_out(s) for s in slots]


@slots_router.post("/", status_code=201)
async def create_slot(data: TimetableSlotCreate, user: CurrentUser):
    slot = TimetableSlot(user_id=owner_id(user), **data.model_dump())
    await slot.insert()
    return _slot_out(slot)


@slots_router.get("/{slot_id}")
async def get_slot(slot_id: str, user: CurrentUser):
    return _slot_out(await _load_slot(user, slot_id))


@slots_router.patch("/{slot_id}")
async def update_slot(slot_id: str, data: TimetableSlotUpdate, user: CurrentUser):
    slot = await _load_slot(user, slot_id)
    update_data = data.model_dump(exclude_unset=True)
    start = update_data.get("start_time", slot.start_time)
    end = update_data.get("end_time", slot.end_time)
    if end <= start:
        raise HTTPException(status_code=400, detail="end_time must be after start_time")
    for key, value in update_data.items():
        setattr(slot, key, value)
    await slot.save()
    return _slot_out(slot)


@slots_router.delete("/{slot_id}", status_code=204)
async def delete_slot(slot_id: str, user: CurrentUser):
    slot = await _load_slot(user, slot_id)
    slot_ref = str(slot.id)
    if await Lesson.find(Lesson.user_id == owner_id(user), Lesson.timetable_slot_id == slot_ref).count():
        raise HTTPException(status_code=409, detail="Slot has planned lessons")
    await TimetableEntry.find(
        TimetableEntry.user_id == owner_id(user), TimetableEntry.timetable_slot_id == slot_ref
    ).delete()
    await slot.delete()
    return None


@router.get("/", response_model=List[TimetableEntryOut])
async def list_timetable(user: CurrentUser):
    return await list_entries(owner_id(user))


@router.get("/day", response_model=DaySchedule)
async def timetable_for_day(user: CurrentUser, day: Optional[date] = Query(None, alias="date")):
    """Entries running on a date, using its rotation week. Empty on non-school days."""
    user_id = owner_id(user)
    years = await list_academic_years(user_id)
    holidays = await list_holidays(user_id)
    calendar_day = describe_day(
        day or date.today(),
        years,
        holidays,
        cycle_length=cycle_length_for(user.timetable_cycle),
        policy=settings.holiday_week_policy,
    )
    return schedule_for_day(calendar_day, await list_entries(user_id))


@router.post("/", response_model=TimetableEntryOut, status_code=201)
async def create_entry(data: TimetableEntryCreate, user: CurrentUser):
    await check_references(owner_id(user), data.model_dump())
    entry = TimetableEntry(user_id=owner_id(user), **data.model_dump())
    await entry.insert()
    return entry_to_out(entry)


@router.get("/{entry_id}", response_model=TimetableEntryOut)
async def get_entry(entry_id: str, user: CurrentUser):
    return entry_to_out(await _load_entry(user, entry_id))


@router.patch("/{entry_id}", response_model=TimetableEntryOut)
async def update_entry(entry_id: str, data: TimetableEntryUpdate, user: CurrentUser):
    entry = await _load_entry(user, entry_id)
    update_data = data.model_dump(exclude_unset=True)
    start = update_data.get("start_date", entry.start_date)
    end = update_data.get("end_date", entry.end_date)
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")
    await check_references(entry.user_id, update_data)
    for key, value in update_data.items():
        setattr(entry, key, value)
    await entry.save()
    return entry_to_out(entry)


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, user: CurrentUser):
    entry = await _load_entry(user, entry_id)
    await entry.delete()
    return None
