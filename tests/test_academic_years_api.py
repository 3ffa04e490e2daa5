from datetime import date

import pytest

from app.api import academic_years as years_api
from app.api import holidays as holidays_api
from app.models.academic_year import AcademicYearOut

YEAR_ID = "64b7f0c2a1b2c3d4e5f60718"

saved = []


class StoredYear(AcademicYearOut):
    """Stands in for a loaded AcademicYear document."""

    async def save(self, **kwargs):
        saved.append(self)


@pytest.fixture
def stored_year(monkeypatch):
    saved.clear()
    year = StoredYear(
        id=YEAR_ID,
        user_id="u1",
        name="2025-26",
        start_date=date(2025, 9, 1),
        end_date=date(2026, 7, 31),
        week_cycle_start_date=date(2025, 9, 1),
        is_active=False,
    )

    async def fake_get_owned_year(user_id, year_id):
        assert user_id == "u1"
        return year if str(year_id) == YEAR_ID else None

    monkeypatch.setattr(years_api, "get_owned_year", fake_get_owned_year)
    monkeypatch.setattr(holidays_api, "get_owned_year", fake_get_owned_year)
    return year


@pytest.fixture
def no_overlap(monkeypatch):
    calls = []

    async def fake_find_overlapping_year(user_id, start, end, exclude_id=None):
        calls.append((user_id, start, end, exclude_id))
        return None

    monkeypatch.setattr(years_api, "find_overlapping_year", fake_find_overlapping_year)
    return calls


def test_create_rejects_overlapping_year(client, monkeypatch):
    async def fake_find_overlapping_year(user_id, start, end, exclude_id=None):
        return AcademicYearOut(
            id="other",
            user_id=user_id,
            name="2024-25",
            start_date=date(2024, 9, 1),
            end_date=date(2025, 9, 5),
            week_cycle_start_date=date(2024, 9, 1),
        )

    monkeypatch.setattr(years_api, "find_overlapping_year", fake_find_overlapping_year)
    response = client.post(
        "/api/academic-years/",
        json={"name": "2025-26", "start_date": "2025-09-01", "end_date": "2026-07-31"},
    )
    assert response.status_code == 409
    assert "2024-25" in response.json()["detail"]


def test_active_year(client, monkeypatch, make_year):
    years = [make_year(active=False, id="old"), make_year(id="current")]

    async def fake_years(user_id):
        return years

    monkeypatch.setattr(years_api, "list_academic_years", fake_years)
    assert client.get("/api/academic-years/active").json()["id"] == "current"

    years[1] = make_year(active=False, id="current")
    assert client.get("/api/academic-years/active").json() is None


def test_update_revalidates_merged_record(client, stored_year, no_overlap):
    response = client.patch(f"/api/academic-years/{YEAR_ID}", json={"week_cycle_start_date": "2026-08-03"})
    assert response.status_code == 400
    assert "week_cycle_start_date" in response.json()["detail"]

    response = client.patch(f"/api/academic-years/{YEAR_ID}", json={"end_date": "2025-08-01"})
    assert response.status_code == 400
    assert saved == []


def test_update_saves_valid_change(client, stored_year, no_overlap):
    response = client.patch(f"/api/academic-years/{YEAR_ID}", json={"week_cycle_start_date": "2025-09-08"})
    assert response.status_code == 200
    assert response.json()["week_cycle_start_date"] == "2025-09-08"
    assert saved == [stored_year]
    assert no_overlap[0][3] == YEAR_ID


def test_update_rejects_overlap(client, stored_year, monkeypatch):
    async def clash(user_id, start, end, exclude_id=None):
        return AcademicYearOut(
            id="other",
            user_id=user_id,
            name="2026-27",
            start_date=date(2026, 7, 1),
            end_date=date(2027, 7, 31),
            week_cycle_start_date=date(2026, 7, 1),
        )

    monkeypatch.setattr(years_api, "find_overlapping_year", clash)
    assert client.patch(f"/api/academic-years/{YEAR_ID}", json={"end_date": "2026-08-31"}).status_code == 409


def test_activate_uses_single_active_switch(client, stored_year, monkeypatch):
    activated = []

    async def fake_activate(year):
        activated.append(year)
        year.is_active = True
        return year

    monkeypatch.setattr(years_api, "activate_academic_year", fake_activate)
    response = client.post(f"/api/academic-years/{YEAR_ID}/activate")
    assert response.status_code == 200
    assert response.json()["is_active"] is True
    assert activated == [stored_year]


def test_patch_is_active_goes_through_activation(client, stored_year, no_overlap, monkeypatch):
    activated = []

    async def fake_activate(year):
        activated.append(year)
        year.is_active = True
        return year

    monkeypatch.setattr(years_api, "activate_academic_year", fake_activate)
    response = client.patch(f"/api/academic-years/{YEAR_ID}", json={"is_active": True})
    assert response.status_code == 200
    assert activated == [stored_year]
    assert saved == []


def test_delete_cascades_to_holidays(client, stored_year, monkeypatch):
    deleted = []

    async def fake_delete(year):
        deleted.append(year)
        return 4

    monkeypatch.setattr(years_api, "delete_academic_year", fake_delete)
    response = client.delete(f"/api/academic-years/{YEAR_ID}")
    assert response.status_code == 200
    assert response.json()["holidays_deleted"] == 4
    assert deleted == [stored_year]


def test_unknown_year_is_not_found(client, stored_year):
    assert client.get("/api/academic-years/64b7f0c2a1b2c3d4e5f60719").status_code == 404
    assert client.delete("/api/academic-years/not-an-id").status_code == 404


def test_holiday_outside_its_year(client, stored_year):
    response = client.post(
        "/api/holidays/",
        json={
            "academic_year_id": YEAR_ID,
            "name": "Summer",
            "start_date": "2026-07-20",
            "end_date": "2026-08-31",
        },
    )
    assert response.status_code == 400
    assert "must fall within" in response.json()["detail"]


def test_holiday_for_unknown_year(client, stored_year):
    response = client.post(
        "/api/holidays/",
        json={"academic_year_id": "64b7f0c2a1b2c3d4e5f60719", "name": "Inset", "start_date": "2025-09-01"},
    )
    assert response.status_code == 404


def test_holidays_filtered_by_range(client, monkeypatch, make_holiday):
    holidays = [
        make_holiday(date(2025, 10, 27), date(2025, 10, 31)),
        make_holiday(date(2025, 12, 22), date(2026, 1, 2)),
    ]

    async def fake_holidays(user_id, academic_year_id=None):
        return holidays

    monkeypatch.setattr(holidays_api, "list_holidays", fake_holidays)
    assert len(client.get("/api/holidays/").json()) == 2
    body = client.get("/api/holidays/", params={"start": "2025-12-01"}).json()
    assert [h["start_date"] for h in body] == ["2025-12-22"]
    body = client.get("/api/holidays/", params={"start": "2025-10-31", "end": "2025-11-07"}).json()
    assert [h["start_date"] for h in body] == ["2025-10-27"]
