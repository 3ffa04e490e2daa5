from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, ConfigDict, Field


class SchoolClass(Document):
    """A class of pupils (e.g. 7B, Year 10 Set 2). Archived rather than deleted."""
    user_id: Indexed(str)
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    number_of_students: int = 0
    notes: Optional[str] = None
    is_archived: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "classes"
        use_state_management = True


class SchoolClassCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=10)
    number_of_students: int = Field(default=0, ge=0, le=1000)
    notes: Optional[str] = None


class SchoolClassUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=10)
    number_of_students: Optional[int] = Field(default=None, ge=0, le=1000)
    notes: Optional[str] = None
    is_archived: Optional[bool] = None
