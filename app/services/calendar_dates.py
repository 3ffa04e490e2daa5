"""ISO-week helpers over plain dates."""
from datetime import date, timedelta
from typing import Iterator

# date.weekday() values that are teaching days (Monday..Friday)
TEACHING_DAYS = frozenset({0, 1, 2, 3, 4})

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_range(day: date) -> tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``day``."""
    monday = monday_of(day)
    return monday, monday + timedelta(days=6)


def weeks_between(start: date, end: date) -> int:
    """Whole weeks from ``start``'s week to ``end``'s week; negative if ``end`` is earlier."""
    return (monday_of(end) - monday_of(start)).days // 7


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


def iter_mondays(start: date, end: date) -> Iterator[date]:
    """Mondays of every ISO week touched by [start, end]."""
    monday = monday_of(start)
    while monday <= end:
        yield monday
        monday += ONE_WEEK


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Closed-interval overlap. An interval ending before it starts is empty."""
    if a_end < a_start or b_end < b_start:
        return False
    return a_start <= b_end and b_start <= a_end
