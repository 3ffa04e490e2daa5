from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.api import calendar as calendar_api
from app.api import timetable as timetable_api
from app.main import app
from app.models.timetable import TimetableEntryOut


@pytest.fixture
def calendar_data(monkeypatch, make_year, make_holiday):
    years = [make_year()]
    holidays = [make_holiday(date(2025, 10, 27), date(2025, 10, 31), type="half_term")]

    async def fake_years(user_id):
        assert user_id == "u1"
        return years

    async def fake_holidays(user_id, academic_year_id=None):
        assert user_id == "u1"
        return holidays

    for module in (calendar_api, timetable_api):
        monkeypatch.setattr(module, "list_academic_years", fake_years)
        monkeypatch.setattr(module, "list_holidays", fake_holidays)
    return years, holidays


def test_health():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_requires_bearer_token():
    response = TestClient(app).get("/api/calendar/week")
    assert response.status_code == 401


def test_week_info(client, calendar_data):
    response = client.get("/api/calendar/week", params={"date": "2025-09-10"})
    assert response.status_code == 200
    body = response.json()
    assert body["academic_year_id"] == "ay1"
    assert body["week_number"] == 2
    assert body["is_school_day"] is True


def test_week_info_without_calendar(client, monkeypatch):
    async def no_years(user_id):
        return []

    async def no_holidays(user_id, academic_year_id=None):
        return []

    monkeypatch.setattr(calendar_api, "list_academic_years", no_years)
    monkeypatch.setattr(calendar_api, "list_holidays", no_holidays)
    body = client.get("/api/calendar/week", params={"date": "2025-09-10"}).json()
    assert body["academic_year_id"] is None
    assert body["week_number"] is None
    assert body["is_school_day"] is False


def test_weekly_users_stay_on_week_one(client, user, calendar_data):
    user.timetable_cycle = "weekly"
    body = client.get("/api/calendar/week", params={"date": "2025-09-10"}).json()
    assert body["week_number"] == 1


def test_resolve(client, calendar_data):
    assert client.get("/api/calendar/resolve", params={"date": "2025-10-01"}).json()["id"] == "ay1"
    assert client.get("/api/calendar/resolve", params={"date": "2025-08-01"}).json() is None


def test_calendar_days(client, calendar_data):
    response = client.get("/api/calendar/days", params={"start": "2025-10-27"})
    assert response.status_code == 200
    days = response.json()
    assert len(days) == 7
    assert not any(d["is_school_day"] for d in days)
    assert all(d["is_holiday_week"] for d in days)
    assert days[0]["holidays"][0]["type"] == "half_term"


def test_calendar_days_validates_range(client, calendar_data):
    assert client.get("/api/calendar/days", params={"start": "2025-10-27", "end": "2025-10-01"}).status_code == 400
    assert client.get("/api/calendar/days", params={"start": "2025-09-01", "end": "2026-07-31"}).status_code == 400


def test_timetable_day(client, monkeypatch, calendar_data):
    entries = [
        TimetableEntryOut(id="e1", day_of_week="monday", period=1, week_number=1),
        TimetableEntryOut(id="e2", day_of_week="monday", period=1, week_number=2),
    ]

    async def fake_entries(user_id):
        return entries

    monkeypatch.setattr(timetable_api, "list_entries", fake_entries)
    body = client.get("/api/timetable/day", params={"date": "2025-09-08"}).json()
    assert body["day"]["week_number"] == 2
    assert [e["id"] for e in body["entries"]] == ["e2"]
    body = client.get("/api/timetable/day", params={"date": "2025-10-27"}).json()
    assert body["entries"] == []


def test_unpaid_user_can_read_calendar_but_not_write(client, user, calendar_data):
    user.subscription_status = None
    assert client.get("/api/calendar/week", params={"date": "2025-09-10"}).status_code == 200
    response = client.post("/api/classes/", json={"name": "7B"})
    assert response.status_code == 403


def test_academic_year_validation_error(client):
    response = client.post(
        "/api/academic-years/",
        json={"name": "2025-26", "start_date": "2026-07-31", "end_date": "2025-09-01"},
    )
    assert response.status_code == 422


def test_malformed_id_is_not_found(client):
    assert client.get("/api/holidays/not-an-id").status_code == 404
