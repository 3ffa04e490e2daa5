"""Academic calendar: which year applies to a date, which rotation week it is,
and whether lessons run that day.

Everything here is pure and works on records that were already loaded and
scoped to the owning user. A missing calendar is reported as ``None`` (or
``False`` for school-day checks), never raised: new accounts have no academic
year until they finish setup.
"""
from datetime import date
from typing import Iterable, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from app.models.academic_year import AcademicYearOut
from app.models.holiday import HolidayOut
from app.models.user import TimetableCycle
from app.services.calendar_dates import (
    ONE_DAY,
    ONE_WEEK,
    TEACHING_DAYS,
    intervals_overlap,
    iter_days,
    iter_mondays,
    monday_of,
    week_range,
    weeks_between,
)

HolidayWeekPolicy = Literal["partial", "full"]


class CalendarDay(BaseModel):
    date: date
    academic_year_id: Optional[str] = None
    week_number: Optional[int] = None
    is_school_day: bool = False
    is_holiday_week: bool = False
    holidays: list[HolidayOut] = Field(default_factory=list)


def resolve_academic_year(target: date, years: Iterable[AcademicYearOut]) -> Optional[AcademicYearOut]:
    """Return the year whose range contains ``target``.

    Overlapping years are a data-entry anomaly; when they happen the active
    year wins, then the one that started most recently.
    """
    candidates = [y for y in years if y.contains(target)]
    if not candidates:
        return None
    for year in candidates:
        if year.is_active:
            return year
    return max(candidates, key=lambda y: y.start_date)


def active_academic_year(years: Iterable[AcademicYearOut]) -> Optional[AcademicYearOut]:
    return next((y for y in years if y.is_active), None)


def cycle_length_for(timetable_cycle) -> int:
    return 2 if TimetableCycle(timetable_cycle) == TimetableCycle.TWO_WEEKLY else 1


def holidays_on(day: date, holidays: Iterable[HolidayOut]) -> list[HolidayOut]:
    return [h for h in holidays if h.covers(day)]


def holidays_in_range(start: date, end: date, holidays: Iterable[HolidayOut]) -> list[HolidayOut]:
    return [h for h in holidays if intervals_overlap(h.start_date, h.end_date, start, end)]


def holidays_for_year(year: AcademicYearOut, holidays: Iterable[HolidayOut]) -> list[HolidayOut]:
    return [h for h in holidays if h.academic_year_id == year.id]


def is_holiday_week(day: date, holidays: Sequence[HolidayOut], policy: HolidayWeekPolicy = "partial") -> bool:
    """Whether the ISO week of ``day`` counts as a holiday week.

    ``partial``: a holiday covers at least one teaching day of the week.
    ``full``: every teaching day of the week is covered. Weekend-only holidays
    never make a holiday week.
    """
    if not holidays:
        return False
    teaching = [d for d in iter_days(*week_range(day)) if d.weekday() in TEACHING_DAYS]
    if policy == "full":
        return bool(teaching) and all(holidays_on(d, holidays) for d in teaching)
    return any(holidays_on(d, holidays) for d in teaching)


def _holiday_weeks_between(anchor: date, target: date, holidays: Sequence[HolidayOut], policy: HolidayWeekPolicy) -> int:
    """Holiday weeks strictly between the anchor's week and the target's week."""
    low, high = sorted((monday_of(anchor), monday_of(target)))
    between = iter_mondays(low + ONE_WEEK, high - ONE_DAY)
    return sum(1 for monday in between if is_holiday_week(monday, holidays, policy))


def weeks_elapsed(
    target: date,
    year: AcademicYearOut,
    holidays: Sequence[HolidayOut] = (),
    policy: HolidayWeekPolicy = "partial",
) -> int:
    """Weeks that advanced the rotation between the cycle anchor and ``target``."""
    elapsed = weeks_between(year.week_cycle_start_date, target)
    if year.skip_holiday_weeks and elapsed:
        skipped = _holiday_weeks_between(year.week_cycle_start_date, target, holidays, policy)
        elapsed = elapsed - skipped if elapsed > 0 else elapsed + skipped
    return elapsed


def week_number_for(
    target: date,
    year: Optional[AcademicYearOut],
    holidays: Sequence[HolidayOut] = (),
    cycle_length: int = 2,
    policy: HolidayWeekPolicy = "partial",
) -> Optional[int]:
    """Rotation week (1..cycle_length) of ``target``, or None outside the year."""
    if year is None or not year.contains(target):
        return None
    elapsed = weeks_elapsed(target, year, holidays, policy)
    # % is floored, so weeks before the anchor wrap instead of flipping sign
    return elapsed % cycle_length + 1


def is_school_day(target: date, year: Optional[AcademicYearOut], holidays: Sequence[HolidayOut] = ()) -> bool:
    if year is None or not year.contains(target):
        return False
    if target.weekday() not in TEACHING_DAYS:
        return False
    return not holidays_on(target, holidays)


def school_days_between(
    start: date,
    end: date,
    year: Optional[AcademicYearOut],
    holidays: Sequence[HolidayOut] = (),
) -> list[date]:
    return [d for d in iter_days(start, end) if is_school_day(d, year, holidays)]


def describe_day(
    day: date,
    years: Sequence[AcademicYearOut],
    holidays: Sequence[HolidayOut],
    cycle_length: int = 2,
    policy: HolidayWeekPolicy = "partial",
) -> CalendarDay:
    year = resolve_academic_year(day, years)
    if year is None:
        return CalendarDay(date=day, holidays=holidays_on(day, holidays))
    year_holidays = holidays_for_year(year, holidays)
    return CalendarDay(
        date=day,
        academic_year_id=year.id,
        week_number=week_number_for(day, year, year_holidays, cycle_length, policy),
        is_school_day=is_school_day(day, year, year_holidays),
        is_holiday_week=is_holiday_week(day, year_holidays, policy),
        holidays=holidays_on(day, year_holidays),
    )


def describe_range(
    start: date,
    end: date,
    years: Sequence[AcademicYearOut],
    holidays: Sequence[HolidayOut],
    cycle_length: int = 2,
    policy: HolidayWeekPolicy = "partial",
) -> list[CalendarDay]:
    return [describe_day(d, years, holidays, cycle_length, policy) for d in iter_days(start, end)]
