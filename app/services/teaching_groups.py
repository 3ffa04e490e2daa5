"""Teaching groups: every pairing of a class with a subject the teacher teaches."""
from typing import Iterable, Optional

from pydantic import BaseModel

from app.models.school_class import SchoolClass
from app.models.subject import Subject

DEFAULT_GROUP_COLOR = "#000000"


class TeachingGroup(BaseModel):
    id: str
    class_id: str
    subject_id: str
    class_name: str
    subject_name: str
    number_of_students: int = 0
    notes: str = ""
    color: str = DEFAULT_GROUP_COLOR
    is_archived: bool = False


def build_teaching_groups(classes: Iterable, subjects: Iterable, include_archived: bool = True) -> list[TeachingGroup]:
    """Cross classes with subjects. Colour comes from the subject, the rest from the class."""
    subjects = list(subjects)
    groups = []
    for school_class in classes:
        if school_class.is_archived and not include_archived:
            continue
        for subject in subjects:
            groups.append(
                TeachingGroup(
                    id=f"{school_class.id}-{subject.id}",
                    class_id=str(school_class.id),
                    subject_id=str(subject.id),
                    class_name=school_class.name,
                    subject_name=subject.name,
                    number_of_students=school_class.number_of_students or 0,
                    notes=school_class.notes or "",
                    color=subject.color or DEFAULT_GROUP_COLOR,
                    is_archived=school_class.is_archived,
                )
            )
    return groups


async def list_classes(user_id: str, include_archived: bool = True) -> list[SchoolClass]:
    query = {"user_id": user_id}
    if not include_archived:
        query["is_archived"] = False
    return await SchoolClass.find(query).sort("name").to_list()


async def list_subjects(user_id: str) -> list[Subject]:
    return await Subject.find(Subject.user_id == user_id).sort("name").to_list()


def find_group(groups: Iterable[TeachingGroup], group_id: str) -> Optional[TeachingGroup]:
    return next((g for g in groups if g.id == group_id), None)
