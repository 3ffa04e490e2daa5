"""Classes. Archived instead of deleted once lessons reference them."""
from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.lesson import Lesson
from app.models.school_class import SchoolClass, SchoolClassCreate, SchoolClassUpdate
from app.models.timetable import TimetableEntry
from app.services.teaching_groups import list_classes

router = APIRouter()


def _class_out(c: SchoolClass) -> dict:
    return {
        "id": str(c.id),
        "name": c.name,
        "description": c.description,
        "color": c.color,
        "number_of_students": c.number_of_students,
        "notes": c.notes,
        "is_archived": c.is_archived,
    }


async def _load_class(user: CurrentUser, class_id: str) -> SchoolClass:
    object_id = parse_object_id(class_id, "Class")
    school_class = await SchoolClass.find_one(
        SchoolClass.id == object_id,
        SchoolClass.user_id == owner_id(user),
    )
    if not school_class:
        raise HTTPException(status_code=404, detail="Class not found")
    return school_class


@router.get("/")
async def list_user_classes(user: CurrentUser, include_archived: bool = False):
    classes = await list_classes(owner_id(user), include_archived)
    return [_class_out(c) for c in classes]


@router.post("/", status_code=201)
async def create_class(data: SchoolClassCreate, user: CurrentUser):
    school_class = SchoolClass(user_id=owner_id(user), **data.model_dump())
    await school_class.insert()
    return _class_out(school_class)


@router.get("/{class_id}")
async def get_class(class_id: str, user: CurrentUser):
    return _class_out(await _load_class(user, class_id))


@router.patch("/{class_id}")
async def update_class(class_id: str, data: SchoolClassUpdate, user: CurrentUser):
    school_class = await _load_class(user, class_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(school_class, key, value)
    school_class.updated_at = datetime.utcnow()
    await school_class.save()
    return _class_out(school_class)


@router.delete("/{class_id}", status_code=204)
async def delete_class(class_id: str, user: CurrentUser):
    school_class = await _load_class(user, class_id)
    class_ref = str(school_class.id)
    if await Lesson.find(Lesson.user_id == owner_id(user), Lesson.class_id == class_ref).count():
        raise HTTPException(status_code=409, detail="Class has lessons; archive it instead")
    await TimetableEntry.find(
        TimetableEntry.user_id == owner_id(user), TimetableEntry.class_id == class_ref
    ).update({"$set": {"class_id": None}})
    await school_class.delete()
    return None
