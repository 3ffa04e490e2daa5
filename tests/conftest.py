import os
from datetime import date
from types import SimpleNamespace

# Settings refuse the placeholder JWT secret outside debug mode
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_current_user
from app.main import app
from app.models.academic_year import AcademicYearOut
from app.models.holiday import HolidayOut


@pytest.fixture
def make_year():
    def _make(
        start=date(2025, 9, 1),
        end=date(2026, 7, 31),
        anchor=None,
        skip=True,
        active=True,
        id="ay1",
        name="2025-26",
    ):
        return AcademicYearOut(
            id=id,
            user_id="u1",
            name=name,
            start_date=start,
            end_date=end,
            week_cycle_start_date=anchor or start,
            skip_holiday_weeks=skip,
            is_active=active,
        )

    return _make


@pytest.fixture
def make_holiday():
    counter = iter(range(1, 1000))

    def _make(start, end=None, academic_year_id="ay1", name="Holiday", type="holiday"):
        return HolidayOut(
            id=f"h{next(counter)}",
            user_id="u1",
            academic_year_id=academic_year_id,
            name=name,
            start_date=start,
            end_date=end or start,
            type=type,
        )

    return _make


@pytest.fixture
def user():
    return SimpleNamespace(
        id="u1",
        email="teacher@example.com",
        full_name="Test Teacher",
        teacher_type="secondary",
        timetable_cycle="2-weekly",
        plan_name="Pro",
        subscription_status="active",
        is_active=True,
        deleted_at=None,
    )


@pytest.fixture
def client(user):
    app.dependency_overrides[get_current_user] = lambda: user
    yield TestClient(app)
    app.dependency_overrides.clear()
