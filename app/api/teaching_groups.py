"""Read-only view of class/subject pairings. Edit them through classes and subjects."""
from typing import List

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, owner_id
from app.services.teaching_groups import (
    TeachingGroup,
    build_teaching_groups,
    find_group,
    list_classes,
    list_subjects,
)

router = APIRouter()


async def _groups_for(user: CurrentUser, include_archived: bool) -> list[TeachingGroup]:
    user_id = owner_id(user)
    return build_teaching_groups(
        await list_classes(user_id, include_archived),
        await list_subjects(user_id),
        include_archived=include_archived,
    )


@router.get("/", response_model=List[TeachingGroup])
async def list_teaching_groups(user: CurrentUser, include_archived: bool = True):
    return await _groups_for(user, include_archived)


@router.get("/{group_id}", response_model=TeachingGroup)
async def get_teaching_group(group_id: str, user: CurrentUser):
    group = find_group(await _groups_for(user, include_archived=True), group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Teaching group not found")
    return group
