"""
Calendar Arithmetic

Calendar-aware date differences and small date utilities used by the
age, date difference, day-of-week and time zone calculators. Month steps
clamp to the last day of shorter months (Jan 31 + 1 month = Feb 28/29).
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Standard-time UTC offsets in hours
ZONE_OFFSETS = {
    "PST": -8.0,
    "MST": -7.0,
    "CST": -6.0,
    "EST": -5.0,
    "AST": -4.0,
    "NST": -3.5,
    "AKST": -9.0,
    "HST": -10.0,
}

# A year-adjusted anchor is always less than a year behind the end date
MAX_MONTH_STEPS = 24


@dataclass(frozen=True)
class YMDDiff:
    """Calendar difference between two dates."""

    years: int
    months: int
    days: int
    total_days: int


def parse_date(raw: Any) -> Optional[date]:
    """Parse an ISO date (YYYY-MM-DD). Dates pass through; anything else is None."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip() if raw is not None else ""
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10]) if len(text) >= 10 else None
    except ValueError:
        return None


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def add_months(day: date, months: int) -> Optional[date]:
    """
    Add calendar months, clamping the day to the target month's length.

    Returns None when the result falls outside the supported date range.
    """
    return _shift(day, months=months)


def _shift(day: date, **offset: int) -> Optional[date]:
    try:
        return day + relativedelta(**offset)
    except (ValueError, OverflowError):
        return None


def diff_ymd(start: Optional[date], end: Optional[date]) -> Optional[YMDDiff]:
    """
    Calendar-aware difference between two dates.

    Years are whole calendar years; months are whole month steps from the
    year-adjusted anchor that do not pass the end date; days are what is
    left. total_days is the plain day count between the two dates and is
    computed independently of the breakdown.

    Returns:
        YMDDiff, or None if a date is missing or end is before start
    """
    if start is None or end is None or end < start:
        return None

    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1

    anchor_year = start.year + years
    cursor = date(anchor_year, start.month, min(start.day, days_in_month(anchor_year, start.month)))

    months = 0
    for _ in range(MAX_MONTH_STEPS):
        step = add_months(cursor, 1)
        if step is None or step > end:
            break
        cursor = step
        months += 1

    return YMDDiff(
        years=years,
        months=months,
        days=(end - cursor).days,
        total_days=(end - start).days,
    )


def calendar_walk_diff(start: date, end: date) -> YMDDiff:
    """
    Difference found by walking forward from the start date.

    Steps whole years, then whole months, while the next step does not
    pass the end date; the remainder is days. An end date before the
    start gives zero years and months and a negative day count.

    Each step is measured from the start date and clamps to the end of
    a short month (Jan 31 + 1 month is Feb 28/29), so steps never roll
    over into the following month.
    """
    def reaches(step: Optional[date]) -> bool:
        return step is not None and step <= end

    years = 0
    while reaches(_shift(start, years=years + 1)):
        years += 1

    months = 0
    while reaches(_shift(start, years=years, months=months + 1)):
        months += 1

    cursor = start + relativedelta(years=years, months=months)
    return YMDDiff(
        years=years,
        months=months,
        days=(end - cursor).days,
        total_days=(end - start).days,
    )


def weekday_name(day: date) -> str:
    """English weekday name, e.g. "Sunday"."""
    return WEEKDAY_NAMES[day.weekday()]


def long_date(day: date) -> str:
    """Long English date, e.g. "June 15, 2025"."""
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def shift_time_zone(
    day: date, hour: int, minute: int, from_zone: str, to_zone: str
) -> Optional[datetime]:
    """
    Convert a wall-clock time between fixed-offset North American zones.

    Returns:
        The wall-clock time in to_zone, or None for an unknown zone or a
        result outside the supported range
    """
    offset_from = ZONE_OFFSETS.get(from_zone)
    offset_to = ZONE_OFFSETS.get(to_zone)
    if offset_from is None or offset_to is None:
        return None
    delta_minutes = round((offset_to - offset_from) * 60)
    local = datetime(day.year, day.month, day.day, hour, minute)
    try:
        return local + timedelta(minutes=delta_minutes)
    except OverflowError:
        return None
