import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field, model_validator


class AcademicYear(Document):
    """A teacher's school year and the anchor of their week rotation."""
    user_id: Indexed(str)
    name: str  # e.g. "2025-26"
    start_date: datetime.date
    end_date: datetime.date
    week_cycle_start_date: datetime.date
    skip_holiday_weeks: bool = True
    is_active: bool = False
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    class Settings:
        name = "academic_years"
        use_state_management = True


class AcademicYearOut(BaseModel):
    id: str
    user_id: str
    name: str
    start_date: datetime.date
    end_date: datetime.date
    week_cycle_start_date: datetime.date
    skip_holiday_weeks: bool = True
    is_active: bool = False
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date


class AcademicYearCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str = Field(min_length=1, max_length=100)
    start_date: datetime.date
    end_date: datetime.date
    week_cycle_start_date: Optional[datetime.date] = None
    skip_holiday_weeks: bool = True
    is_active: bool = False

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.week_cycle_start_date is None:
            self.week_cycle_start_date = self.start_date
        if not self.start_date <= self.week_cycle_start_date <= self.end_date:
            raise ValueError("week_cycle_start_date must fall within the academic year")
        return self


class AcademicYearUpdate(BaseModel):
    """Partial update; the merged record is re-validated by the router."""
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    week_cycle_start_date: Optional[datetime.date] = None
    skip_holiday_weeks: Optional[bool] = None
    is_active: Optional[bool] = None
