import asyncio
from contextlib import asynccontextmanager
from types import SimpleNamespace

import pytest

from app.services import academic_year as service


class FakeQuery:
    def __init__(self, log, collection, deleted_count=0):
        self.log = log
        self.collection = collection
        self.deleted_count = deleted_count

    async def update(self, update, session=None):
        self.log.append((self.collection, "update", update, session))

    async def delete(self, session=None):
        self.log.append((self.collection, "delete", session))
        return SimpleNamespace(deleted_count=self.deleted_count)


def fake_collection(log, name, deleted_count=0):
    class Collection:
        id = "id"
        user_id = "user_id"
        academic_year_id = "academic_year_id"

        @staticmethod
        def find(*conditions, session=None):
            log.append((name, "find", session))
            return FakeQuery(log, name, deleted_count)

    return Collection


@pytest.fixture
def log(monkeypatch):
    entries = []

    @asynccontextmanager
    async def fake_transaction():
        entries.append("begin")
        yield "session"
        entries.append("commit")

    monkeypatch.setattr(service, "transaction", fake_transaction)
    monkeypatch.setattr(service, "AcademicYear", fake_collection(entries, "academic_years"))
    monkeypatch.setattr(service, "Holiday", fake_collection(entries, "holidays", deleted_count=3))
    return entries


def stored(log, **fields):
    async def save(session=None):
        log.append(("year", "save", session))

    async def insert(session=None):
        log.append(("year", "insert", session))

    async def delete(session=None):
        log.append(("year", "delete", session))

    return SimpleNamespace(
        id="ay2", user_id="u1", is_active=False, updated_at=None, save=save, insert=insert, delete=delete, **fields
    )


def test_activate_deactivates_other_years_in_one_transaction(log):
    year = stored(log)
    asyncio.run(service.activate_academic_year(year))
    assert year.is_active is True
    assert log == [
        "begin",
        ("academic_years", "find", "session"),
        ("academic_years", "update", {"$set": {"is_active": False}}, "session"),
        ("year", "save", "session"),
        "commit",
    ]


def test_insert_inactive_year_skips_transaction(log):
    asyncio.run(service.insert_academic_year(stored(log)))
    assert log == [("year", "insert", None)]


def test_insert_active_year_clears_previous_active(log):
    year = stored(log)
    year.is_active = True
    asyncio.run(service.insert_academic_year(year))
    assert log == [
        "begin",
        ("academic_years", "find", "session"),
        ("academic_years", "update", {"$set": {"is_active": False}}, "session"),
        ("year", "insert", "session"),
        "commit",
    ]


def test_delete_removes_holidays_with_the_year(log):
    removed = asyncio.run(service.delete_academic_year(stored(log)))
    assert removed == 3
    assert log == [
        "begin",
        ("holidays", "find", "session"),
        ("holidays", "delete", "session"),
        ("year", "delete", "session"),
        "commit",
    ]
