"""Teacher accounts. Written by the auth and billing services, read here."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field


class TimetableCycle(str, Enum):
    WEEKLY = "weekly"
    TWO_WEEKLY = "2-weekly"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"


class User(Document):
    """User document shared with the auth and Stripe webhook services."""

    email: Indexed(EmailStr, unique=True)
    full_name: Optional[str] = None
    teacher_type: str = "primary"
    timetable_cycle: TimetableCycle = TimetableCycle.WEEKLY
    is_active: bool = True

    # Billing state, maintained by the Stripe webhook handler
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    plan_name: Optional[str] = None
    subscription_status: Optional[SubscriptionStatus] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = None

    class Settings:
        name = "users"
        use_state_management = True


class UserOut(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    teacher_type: str
    timetable_cycle: TimetableCycle
    plan_name: Optional[str] = None
    subscription_status: Optional[SubscriptionStatus] = None


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    teacher_type: Optional[str] = None
    timetable_cycle: Optional[TimetableCycle] = None
