"""Calendar date arithmetic - pure, timezone-free date helpers"""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Optional

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

DEFAULT_PAY_CYCLE_DAYS = 7


def parse_date(value: Any) -> Optional[date]:
    """Read a date, datetime or ISO string; anything else is None"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def add_days(from_date: date, days: int) -> date:
    """Add (or subtract) whole calendar days"""
    return from_date + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Signed day count from start to end"""
    return (end - start).days


def _clamped(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def next_day_of_month(anchor: date, day_of_month: int) -> date:
    """
    Next date whose day-of-month is `day_of_month`, clamped for short months.

    If the day is today or later in the anchor's month it resolves in the
    same month, otherwise it rolls into the next month.

    Example:
        (2024-01-15, 20) -> 2024-01-20
        (2024-01-15, 10) -> 2024-02-10
        (2024-02-01, 31) -> 2024-02-29
    """
    year, month = anchor.year, anchor.month
    if anchor.day > day_of_month:
        month += 1
        if month > 12:
            month = 1
            year += 1
    return _clamped(year, month, day_of_month)


def next_payday(anchor: date, weekday_name: str) -> date:
    """
    Next date falling on the named weekday, strictly after the anchor.

    An anchor that already falls on the weekday resolves a week out.
    Unrecognized names fall back to anchor + 7 days.
    """
    name = (weekday_name or "").strip().lower()
    if name not in WEEKDAYS:
        return add_days(anchor, DEFAULT_PAY_CYCLE_DAYS)

    days_until = WEEKDAYS.index(name) - anchor.weekday()
    if days_until <= 0:
        days_until += 7
    return add_days(anchor, days_until)


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    return _clamped(year, month, from_date.day)
