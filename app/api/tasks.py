from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.task import Task, TaskCreate, TaskUpdate

router = APIRouter()


def _task_out(t: Task) -> dict:
    return {
        "id": str(t.id),
        "title": t.title,
        "description": t.description,
        "due_date": t.due_date,
        "priority": t.priority,
        "completed": t.completed,
        "tags": t.tags,
        "created_at": t.created_at,
        "updated_at": t.updated_at,
    }


async def _load_task(user: CurrentUser, task_id: str) -> Task:
    object_id = parse_object_id(task_id, "Task")
    task = await Task.find_one(
        Task.id == object_id,
        Task.user_id == owner_id(user),
        Task.deleted_at == None,  # noqa: E711
    )
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/")
async def list_tasks(
    user: CurrentUser,
    completed: Optional[bool] = Query(None),
    tag: Optional[str] = Query(None),
):
    query = {"user_id": owner_id(user), "deleted_at": None}
    if completed is not None:
        query["completed"] = completed
    if tag:
        query["tags"] = tag
    tasks = await Task.find(query).sort("completed", "due_date", "-created_at").to_list()
    return [_task_out(t) for t in tasks]


@router.post("/", status_code=201)
async def create_task(data: TaskCreate, user: CurrentUser):
    task = Task(user_id=owner_id(user), **data.model_dump())
    await task.insert()
    return _task_out(task)


@router.get("/{task_id}")
async def get_task(task_id: str, user: CurrentUser):
    return _task_out(await _load_task(user, task_id))


@router.patch("/{task_id}")
async def update_task(task_id: str, data: TaskUpdate, user: CurrentUser):
    task = await _load_task(user, task_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(task, key, value)
    task.updated_at = datetime.utcnow()
    await task.save()
    return _task_out(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, user: CurrentUser):
    """Soft delete."""
    task = await _load_task(user, task_id)
    task.deleted_at = datetime.utcnow()
    await task.save()
    return None
