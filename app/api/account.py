"""The caller's own profile and a full export of their records."""
from datetime import datetime

from fastapi import APIRouter

from app.api.deps import CurrentUser, owner_id
from app.models.event import Event
from app.models.lesson import Lesson
from app.models.school_class import SchoolClass
from app.models.subject import Subject
from app.models.task import Task
from app.models.timetable import TimetableEntry, TimetableSlot
from app.models.user import User, UserOut, UserUpdate
from app.services.academic_year import list_academic_years, list_holidays

router = APIRouter()

# Collections included in the data export, by response key
EXPORT_MODELS = {
    "classes": SchoolClass,
    "subjects": Subject,
    "timetable_slots": TimetableSlot,
    "timetable_entries": TimetableEntry,
    "lessons": Lesson,
    "tasks": Task,
    "events": Event,
}


def user_to_out(user: User) -> UserOut:
    return UserOut(
        id=str(user.id),
        email=user.email,
        full_name=user.full_name,
        teacher_type=user.teacher_type,
        timetable_cycle=user.timetable_cycle,
        plan_name=user.plan_name,
        subscription_status=user.subscription_status,
    )


@router.get("/me", response_model=UserOut)
async def me(user: CurrentUser):
    return user_to_out(user)


@router.patch("/me", response_model=UserOut)
async def update_me(data: UserUpdate, user: CurrentUser):
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, key, value)
    user.updated_at = datetime.utcnow()
    await user.save()
    return user_to_out(user)


@router.get("/export")
async def export_data(user: CurrentUser):
    """Everything stored for the caller, for download."""
    user_id = owner_id(user)
    export = {
        "exported_at": datetime.utcnow(),
        "user": user_to_out(user).model_dump(),
        "academic_years": [y.model_dump() for y in await list_academic_years(user_id)],
        "holidays": [h.model_dump() for h in await list_holidays(user_id)],
    }
    for key, model in EXPORT_MODELS.items():
        docs = await model.find({"user_id": user_id}).to_list()
        export[key] = [{**d.model_dump(exclude={"id", "revision_id"}), "id": str(d.id)} for d in docs]
    return export
