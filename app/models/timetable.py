"""Timetable periods (slots) and the class/subject placed in each one (entries)."""
import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field, model_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"

    @classmethod
    def for_date(cls, day: datetime.date) -> Optional["DayOfWeek"]:
        members = list(cls)
        weekday = day.weekday()
        return members[weekday] if weekday < len(members) else None


class TimetableSlot(Document):
    """A period of the school day, per rotation week."""
    user_id: Indexed(str)
    period: int
    week_number: int = 1
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    label: Optional[str] = None

    class Settings:
        name = "timetable_slots"
        use_state_management = True


class TimetableSlotCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    period: int = Field(ge=0, le=20)
    week_number: int = Field(default=1, ge=1, le=2)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    label: Optional[str] = Field(default=None, max_length=100)

    @model_validator(mode="after")
    def _check_times(self):
        # zero-padded HH:MM compares correctly as text
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class TimetableSlotUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    period: Optional[int] = Field(default=None, ge=0, le=20)
    week_number: Optional[int] = Field(default=None, ge=1, le=2)
    start_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    label: Optional[str] = Field(default=None, max_length=100)


class TimetableEntry(Document):
    """What is taught in a slot on a given weekday of a rotation week."""
    user_id: Indexed(str)
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    timetable_slot_id: Optional[str] = None
    day_of_week: DayOfWeek
    period: int
    week_number: int = 1
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    room: Optional[str] = None
    notes: Optional[str] = None

    class Settings:
        name = "timetable_entries"
        use_state_management = True


class TimetableEntryOut(BaseModel):
    id: str
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    timetable_slot_id: Optional[str] = None
    day_of_week: DayOfWeek
    period: int
    week_number: int = 1
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    room: Optional[str] = None
    notes: Optional[str] = None

    def runs_on(self, day: datetime.date, week_number: int) -> bool:
        if self.day_of_week != DayOfWeek.for_date(day) or self.week_number != week_number:
            return False
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True


class TimetableEntryCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    timetable_slot_id: Optional[str] = None
    day_of_week: DayOfWeek
    period: int = Field(ge=0, le=20)
    week_number: int = Field(default=1, ge=1, le=2)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    room: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TimetableEntryUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    timetable_slot_id: Optional[str] = None
    day_of_week: Optional[DayOfWeek] = None
    period: Optional[int] = Field(default=None, ge=0, le=20)
    week_number: Optional[int] = Field(default=None, ge=1, le=2)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    room: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None
