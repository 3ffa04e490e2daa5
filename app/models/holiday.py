import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field, model_validator


class HolidayType(str, Enum):
    HOLIDAY = "holiday"
    HALF_TERM = "half_term"
    TERM_BREAK = "term_break"
    INSET_DAY = "inset_day"
    TRAINING_DAY = "training_day"
    PLANNING_DAY = "planning_day"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def default_color(self) -> str:
        return _COLORS[self]


_LABELS = {
    HolidayType.HOLIDAY: "Holiday",
    HolidayType.HALF_TERM: "Half Term",
    HolidayType.TERM_BREAK: "Term Break",
    HolidayType.INSET_DAY: "INSET Day",
    HolidayType.TRAINING_DAY: "Training Day",
    HolidayType.PLANNING_DAY: "Planning Day",
}

_COLORS = {
    HolidayType.HOLIDAY: "#ef4444",
    HolidayType.HALF_TERM: "#10b981",
    HolidayType.TERM_BREAK: "#f59e0b",
    HolidayType.INSET_DAY: "#3b82f6",
    HolidayType.TRAINING_DAY: "#8b5cf6",
    HolidayType.PLANNING_DAY: "#f97316",
}


class Holiday(Document):
    """Closed date range with no teaching, owned by one academic year."""
    user_id: Indexed(str)
    academic_year_id: Indexed(str)
    name: str
    start_date: Indexed(datetime.date)
    end_date: datetime.date
    type: HolidayType = HolidayType.HOLIDAY
    color: Optional[str] = None
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    class Settings:
        name = "holidays"
        use_state_management = True


class HolidayOut(BaseModel):
    id: str
    user_id: str
    academic_year_id: str
    name: str
    start_date: datetime.date
    end_date: datetime.date
    type: HolidayType = HolidayType.HOLIDAY
    color: Optional[str] = None

    def covers(self, day: datetime.date) -> bool:
        # An inverted range is empty
        return self.start_date <= day <= self.end_date


class HolidayCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    academic_year_id: str
    name: str = Field(min_length=1, max_length=100)
    start_date: datetime.date
    end_date: Optional[datetime.date] = None  # single-day holiday when omitted
    type: HolidayType = HolidayType.HOLIDAY
    color: Optional[str] = None

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date is None:
            self.end_date = self.start_date
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class HolidayUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    type: Optional[HolidayType] = None
    color: Optional[str] = None
