# callmetrics/services/periods.py
"""
Period boundaries used to scope aggregation.

Rules:
- yesterday: the day before "now"
- week: Monday through Saturday of the current week (Sunday is not covered;
  on a Sunday the range is the week that just ended)
- month / year: the full calendar month / year containing "now"
- comparisons are inclusive and done at day granularity
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from callmetrics.constants import (
    DISPLAY_DATE_FORMAT,
    LABEL_CUSTOM,
    LABEL_MONTH,
    LABEL_WEEK,
    LABEL_YEAR,
    LABEL_YESTERDAY,
    MONTH_NAMES_PT,
)
from callmetrics.errors import InvalidInputError, InvalidPeriodError
from callmetrics.schemas.records import CallRecord, PeriodKind, PeriodRange

DateLike = Union[date, datetime]


def _to_day(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidInputError(
        f"expected a date or datetime, got {type(value).__name__}",
        details={"type": type(value).__name__},
    )


def _fmt(day: date) -> str:
    return day.strftime(DISPLAY_DATE_FORMAT)


def week_bounds(today: date) -> tuple[date, date]:
    """Monday..Saturday containing today (the previous one on Sundays)."""
    # isoweekday: Monday=1 .. Sunday=7
    weekday = today.isoweekday() % 7  # Sunday=0, Monday=1 .. Saturday=6
    days_since_monday = 6 if weekday == 0 else weekday - 1
    start = today - timedelta(days=days_since_monday)
    return start, start + timedelta(days=5)


def month_bounds(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def year_bounds(today: date) -> tuple[date, date]:
    return date(today.year, 1, 1), date(today.year, 12, 31)


def resolve_periods(now: DateLike) -> List[PeriodRange]:
    """Return the yesterday, week, month and year ranges, in that order."""
    today = _to_day(now)

    yesterday = today - timedelta(days=1)
    week_start, week_end = week_bounds(today)
    month_start, month_end = month_bounds(today)
    year_start, year_end = year_bounds(today)

    return [
        PeriodRange(
            kind=PeriodKind.YESTERDAY,
            label=LABEL_YESTERDAY,
            start=yesterday,
            end=yesterday,
        ),
        PeriodRange(
            kind=PeriodKind.WEEK,
            label=LABEL_WEEK.format(start=_fmt(week_start), end=_fmt(week_end)),
            start=week_start,
            end=week_end,
        ),
        PeriodRange(
            kind=PeriodKind.MONTH,
            label=LABEL_MONTH.format(month=MONTH_NAMES_PT[today.month - 1], year=today.year),
            start=month_start,
            end=month_end,
        ),
        PeriodRange(
            kind=PeriodKind.YEAR,
            label=LABEL_YEAR.format(year=today.year),
            start=year_start,
            end=year_end,
        ),
    ]


def custom_period(start: DateLike, end: DateLike, label: Optional[str] = None) -> PeriodRange:
    """Caller-chosen inclusive range."""
    start_day, end_day = _to_day(start), _to_day(end)
    if start_day > end_day:
        raise InvalidPeriodError(
            f"period start {start_day} is after end {end_day}",
            details={"start": start_day.isoformat(), "end": end_day.isoformat()},
        )
    return PeriodRange(
        kind=PeriodKind.CUSTOM,
        label=label or LABEL_CUSTOM.format(start=_fmt(start_day), end=_fmt(end_day)),
        start=start_day,
        end=end_day,
    )


def filter_by_period(records: Iterable[CallRecord], period: PeriodRange) -> List[CallRecord]:
    """Records whose day falls inside the period; undated records never match."""
    return [r for r in records if period.contains(r.date)]
