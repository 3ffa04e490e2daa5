from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Event(Document):
    """Calendar event outside the timetable (meetings, trips, parents' evenings)."""
    user_id: Indexed(str)
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Indexed(datetime)
    end_time: datetime
    all_day: bool = False
    color: Optional[str] = None

    class Settings:
        name = "events"
        use_state_management = True


class EventCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    start_time: datetime
    end_time: Optional[datetime] = None
    all_day: bool = False
    color: Optional[str] = Field(default=None, max_length=10)

    @model_validator(mode="after")
    def _check_times(self):
        if self.end_time is None:
            if not self.all_day:
                raise ValueError("end_time is required unless the event is all day")
            self.end_time = self.start_time
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class EventUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    all_day: Optional[bool] = None
    color: Optional[str] = Field(default=None, max_length=10)
