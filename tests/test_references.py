import asyncio

import pytest
from fastapi import HTTPException

from app.api import deps

CLASS_ID = "64b7f0c2a1b2c3d4e5f60701"
SUBJECT_ID = "64b7f0c2a1b2c3d4e5f60702"
SLOT_ID = "64b7f0c2a1b2c3d4e5f60703"


def owned_by(owner, lookups):
    class Model:
        @staticmethod
        async def find_one(query):
            lookups.append(query)
            return object() if query["user_id"] == owner else None

    return Model


@pytest.fixture
def lookups(monkeypatch):
    seen = []
    for field, (_, what) in list(deps.REFERENCE_MODELS.items()):
        monkeypatch.setitem(deps.REFERENCE_MODELS, field, (owned_by("u1", seen), what))
    return seen


def test_owned_references_pass(lookups):
    refs = {"class_id": CLASS_ID, "subject_id": SUBJECT_ID, "timetable_slot_id": SLOT_ID}
    asyncio.run(deps.check_references("u1", refs))
    assert [str(q["_id"]) for q in lookups] == [CLASS_ID, SUBJECT_ID, SLOT_ID]


def test_missing_references_are_skipped(lookups):
    asyncio.run(deps.check_references("u1", {"subject_id": SUBJECT_ID, "class_id": None}))
    assert [str(q["_id"]) for q in lookups] == [SUBJECT_ID]


def test_other_users_reference_is_rejected(lookups):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(deps.check_references("u2", {"class_id": CLASS_ID}))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Class not found"


def test_malformed_reference_is_rejected_without_lookup(lookups):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(deps.check_references("u1", {"timetable_slot_id": "slot-1"}))
    assert exc.value.detail == "Timetable slot not found"
    assert lookups == []


def test_timetable_entry_rejects_foreign_subject(client, monkeypatch):
    lookups = []
    monkeypatch.setitem(deps.REFERENCE_MODELS, "subject_id", (owned_by("someone-else", lookups), "Subject"))
    response = client.post(
        "/api/timetable/",
        json={"subject_id": SUBJECT_ID, "day_of_week": "monday", "period": 1, "week_number": 2},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Subject not found"
    assert lookups[0]["user_id"] == "u1"


def test_timetable_entry_rejects_malformed_class(client):
    response = client.post("/api/timetable/", json={"class_id": "junk", "day_of_week": "friday", "period": 3})
    assert response.status_code == 400
    assert response.json()["detail"] == "Class not found"


def test_lesson_rejects_foreign_slot(client, lookups, monkeypatch):
    monkeypatch.setitem(deps.REFERENCE_MODELS, "timetable_slot_id", (owned_by("someone-else", lookups), "Timetable slot"))
    response = client.post(
        "/api/lessons/",
        json={
            "class_id": CLASS_ID,
            "subject_id": SUBJECT_ID,
            "timetable_slot_id": SLOT_ID,
            "title": "Fractions",
            "date": "2025-09-08",
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Timetable slot not found"
