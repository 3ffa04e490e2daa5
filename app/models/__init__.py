"""Beanie document models and Pydantic schemas."""
from app.models.user import User, UserOut, UserUpdate, TimetableCycle, SubscriptionStatus
from app.models.academic_year import AcademicYear, AcademicYearOut, AcademicYearCreate, AcademicYearUpdate
from app.models.holiday import Holiday, HolidayOut, HolidayCreate, HolidayUpdate, HolidayType
from app.models.school_class import SchoolClass, SchoolClassCreate, SchoolClassUpdate
from app.models.subject import Subject, SubjectCreate, SubjectUpdate
from app.models.timetable import (
    DayOfWeek,
    TimetableSlot,
    TimetableSlotCreate,
    TimetableSlotUpdate,
    TimetableEntry,
    TimetableEntryOut,
    TimetableEntryCreate,
    TimetableEntryUpdate,
)
from app.models.lesson import Lesson, LessonCreate, LessonUpdate
from app.models.task import Task, TaskCreate, TaskUpdate, TaskPriority
from app.models.event import Event, EventCreate, EventUpdate

__all__ = [
    "User",
    "UserOut",
    "UserUpdate",
    "TimetableCycle",
    "SubscriptionStatus",
    "AcademicYear",
    "AcademicYearOut",
    "AcademicYearCreate",
    "AcademicYearUpdate",
    "Holiday",
    "HolidayOut",
    "HolidayCreate",
    "HolidayUpdate",
    "HolidayType",
    "SchoolClass",
    "SchoolClassCreate",
    "SchoolClassUpdate",
    "Subject",
    "SubjectCreate",
    "SubjectUpdate",
    "DayOfWeek",
    "TimetableSlot",
    "TimetableSlotCreate",
    "TimetableSlotUpdate",
    "TimetableEntry",
    "TimetableEntryOut",
    "TimetableEntryCreate",
    "TimetableEntryUpdate",
    "Lesson",
    "LessonCreate",
    "LessonUpdate",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskPriority",
    "Event",
    "EventCreate",
    "EventUpdate",
]
