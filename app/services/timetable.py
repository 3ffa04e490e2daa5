"""Timetable lookups that depend on the rotation week."""
from datetime import date

from pydantic import BaseModel, Field

from app.models.timetable import TimetableEntry, TimetableEntryOut
from app.services.academic_calendar import CalendarDay


class DaySchedule(BaseModel):
    day: CalendarDay
    entries: list[TimetableEntryOut] = Field(default_factory=list)


def entry_to_out(entry: TimetableEntry) -> TimetableEntryOut:
    return TimetableEntryOut(**entry.model_dump(exclude={"id", "revision_id", "user_id"}), id=str(entry.id))


async def list_entries(user_id: str) -> list[TimetableEntryOut]:
    entries = await TimetableEntry.find(TimetableEntry.user_id == user_id).sort("week_number", "period").to_list()
    return [entry_to_out(e) for e in entries]


def schedule_for_day(calendar_day: CalendarDay, entries: list[TimetableEntryOut]) -> DaySchedule:
    """Entries that run on ``calendar_day``; none when it is not a school day."""
    if not calendar_day.is_school_day or calendar_day.week_number is None:
        return DaySchedule(day=calendar_day)
    day: date = calendar_day.date
    running = [e for e in entries if e.runs_on(day, calendar_day.week_number)]
    running.sort(key=lambda e: e.period)
    return DaySchedule(day=calendar_day, entries=running)
