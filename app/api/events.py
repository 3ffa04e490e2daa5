from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, owner_id, parse_object_id
from app.models.event import Event, EventCreate, EventUpdate

router = APIRouter()


def _event_out(e: Event) -> dict:
    return {
        "id": str(e.id),
        "title": e.title,
        "description": e.description,
        "location": e.location,
        "start_time": e.start_time,
        "end_time": e.end_time,
        "all_day": e.all_day,
        "color": e.color,
    }


async def _load_event(user: CurrentUser, event_id: str) -> Event:
    object_id = parse_object_id(event_id, "Event")
    event = await Event.find_one(
        Event.id == object_id,
        Event.user_id == owner_id(user),
    )
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/")
async def list_events(
    user: CurrentUser,
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
):
    """Events overlapping [start, end] when given, else all of the caller's events."""
    query = {"user_id": owner_id(user)}
    if start:
        query["end_time"] = {"$gte": start}
    if end:
        query["start_time"] = {"$lte": end}
    events = await Event.find(query).sort("start_time").to_list()
    return [_event_out(e) for e in events]


@router.post("/", status_code=201)
async def create_event(data: EventCreate, user: CurrentUser):
    event = Event(user_id=owner_id(user), **data.model_dump())
    await event.insert()
    return _event_out(event)


@router.get("/{event_id}")
async def get_event(event_id: str, user: CurrentUser):
    return _event_out(await _load_event(user, event_id))


@router.patch("/{event_id}")
async def update_event(event_id: str, data: EventUpdate, user: CurrentUser):
    event = await _load_event(user, event_id)
    update_data = data.model_dump(exclude_unset=True)
    all_day = update_data.get("all_day", event.all_day)
    start = update_data.get("start_time") or event.start_time
    end = update_data.get("end_time") or event.end_time
    if end < start and all_day and not update_data.get("end_time"):
        end = start
    if end < start:
        raise HTTPException(status_code=400, detail="end_time must not be before start_time")
    for key, value in update_data.items():
        setattr(event, key, value)
    event.start_time = start
    event.end_time = end
    await event.save()
    return _event_out(event)


@router.delete("/{event_id}")
async def delete_event(event_id: str, user: CurrentUser):
    event = await _load_event(user, event_id)
    await event.delete()
    return {"message": "Event deleted"}
