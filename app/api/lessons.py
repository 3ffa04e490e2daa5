"""Lesson plans, with class/subject/slot details joined in."""
from datetime import date, datetime
from typing import Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, check_references, owner_id, parse_object_id
from app.models.lesson import Lesson, LessonCreate, LessonUpdate
from app.models.school_class import SchoolClass
from app.models.subject import Subject
from app.models.timetable import TimetableSlot

router = APIRouter()


async def _by_id(model, ids: set[str]) -> dict:
    object_ids = [PydanticObjectId(i) for i in ids if PydanticObjectId.is_valid(i)]
    if not object_ids:
        return {}
    docs = await model.find({"_id": {"$in": object_ids}}).to_list()
    return {str(d.id): d for d in docs}


async def _lessons_out(lessons: list[Lesson]) -> list[dict]:
    classes = await _by_id(SchoolClass, {l.class_id for l in lessons})
    subjects = await _by_id(Subject, {l.subject_id for l in lessons})
    slots = await _by_id(TimetableSlot, {l.timetable_slot_id for l in lessons})
    out = []
    for l in lessons:
        c = classes.get(l.class_id)
        s = subjects.get(l.subject_id)
        slot = slots.get(l.timetable_slot_id)
        out.append(
            {
                "id": str(l.id),
                "class_id": l.class_id,
                "subject_id": l.subject_id,
                "timetable_slot_id": l.timetable_slot_id,
                "title": l.title,
                "date": l.date,
                "lesson_plan": l.lesson_plan,
                "plan_completed": l.plan_completed,
                "class_name": c.name if c else None,
                "subject_name": s.name if s else None,
                "slot_start_time": slot.start_time if slot else None,
                "slot_end_time": slot.end_time if slot else None,
                "slot_label": slot.label if slot else None,
                "slot_period": slot.period if slot else None,
                "slot_week_number": slot.week_number if slot else None,
            }
        )
    return out


async def _load_lesson(user: CurrentUser, lesson_id: str) -> Lesson:
    object_id = parse_object_id(lesson_id, "Lesson")
    lesson = await Lesson.find_one(
        Lesson.id == object_id,
        Lesson.user_id == owner_id(user),
    )
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


@router.get("/")
async def list_lessons(
    user: CurrentUser,
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    class_id: Optional[str] = Query(None),
):
    query = {"user_id": owner_id(user)}
    date_filter = {}
    if start:
        date_filter["$gte"] = start
    if end:
        date_filter["$lte"] = end
    if date_filter:
        query["date"] = date_filter
    if class_id:
        query["class_id"] = class_id
    lessons = await Lesson.find(query).sort("date", "_id").to_list()
    return await _lessons_out(lessons)


@router.post("/", status_code=201)
async def create_lesson(data: LessonCreate, user: CurrentUser):
    user_id = owner_id(user)
    await check_references(user_id, data.model_dump())
    lesson = Lesson(user_id=user_id, **data.model_dump())
    await lesson.insert()
    return (await _lessons_out([lesson]))[0]


@router.get("/{lesson_id}")
async def get_lesson(lesson_id: str, user: CurrentUser):
    lesson = await _load_lesson(user, lesson_id)
    return (await _lessons_out([lesson]))[0]


@router.patch("/{lesson_id}")
async def update_lesson(lesson_id: str, data: LessonUpdate, user: CurrentUser):
    lesson = await _load_lesson(user, lesson_id)
    update_data = data.model_dump(exclude_unset=True)
    if {"class_id", "subject_id", "timetable_slot_id"} & update_data.keys():
        await check_references(lesson.user_id, update_data)
    for key, value in update_data.items():
        if value is not None or key == "lesson_plan":
            setattr(lesson, key, value)
    lesson.updated_at = datetime.utcnow()
    await lesson.save()
    return (await _lessons_out([lesson]))[0]


@router.delete("/{lesson_id}", status_code=204)
async def delete_lesson(lesson_id: str, user: CurrentUser):
    lesson = await _load_lesson(user, lesson_id)
    await lesson.delete()
    return None
