from datetime import datetime

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.lesson import Lesson
from app.models.subject import Subject, SubjectCreate, SubjectUpdate
from app.models.timetable import TimetableEntry
from app.services.teaching_groups import list_subjects

router = APIRouter()


def _subject_out(s: Subject) -> dict:
    return {"id": str(s.id), "name": s.name, "color": s.color}


async def _load_subject(user: CurrentUser, subject_id: str) -> Subject:
    object_id = parse_object_id(subject_id, "Subject")
    subject = await Subject.find_one(
        Subject.id == object_id,
        Subject.user_id == owner_id(user),
    )
    if not subject:
        raise HTTPException(status_code=404, detail="Subject not found")
    return subject


@router.get("/")
async def list_user_subjects(user: CurrentUser):
    subjects = await list_subjects(owner_id(user))
    return [_subject_out(s) for s in subjects]


@router.post("/", status_code=201)
async def create_subject(data: SubjectCreate, user: CurrentUser):
    subject = Subject(user_id=owner_id(user), **data.model_dump())
    await subject.insert()
    return _subject_out(subject)


@router.get("/{subject_id}")
async def get_subject(subject_id: str, user: CurrentUser):
    return _subject_out(await _load_subject(user, subject_id))


@router.patch("/{subject_id}")
async def update_subject(subject_id: str, data: SubjectUpdate, user: CurrentUser):
    subject = await _load_subject(user, subject_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(subject, key, value)
    subject.updated_at = datetime.utcnow()
    await subject.save()
    return _subject_out(subject)


@router.delete("/{subject_id}", status_code=204)
async def delete_subject(subject_id: str, user: CurrentUser):
    subject = await _load_subject(user, subject_id)
    subject_ref = str(subject.id)
    if await Lesson.find(Lesson.user_id == owner_id(user), Lesson.subject_id == subject_ref).count():
        raise HTTPException(status_code=409, detail="Subject is used by lessons")
    await TimetableEntry.find(
        TimetableEntry.user_id == owner_id(user), TimetableEntry.subject_id == subject_ref
    ).update({"$set": {"subject_id": None}})
    await subject.delete()
    return None
