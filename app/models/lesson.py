"""Planned lessons tied to a class, subject and timetable slot."""
import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field


class Lesson(Document):
    user_id: Indexed(str)
    class_id: Indexed(str)
    subject_id: Indexed(str)
    timetable_slot_id: str
    title: str
    date: Indexed(datetime.date)
    lesson_plan: Optional[str] = None
    plan_completed: bool = False
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    class Settings:
        name = "lessons"
        use_state_management = True


class LessonCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    class_id: str
    subject_id: str
    timetable_slot_id: str
    title: str = Field(min_length=1, max_length=255)
    date: datetime.date
    lesson_plan: Optional[str] = None
    plan_completed: bool = False


class LessonUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    class_id: Optional[str] = None
    subject_id: Optional[str] = None
    timetable_slot_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[datetime.date] = None
    lesson_plan: Optional[str] = None
    plan_completed: Optional[bool] = None
