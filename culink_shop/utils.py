from datetime import date, datetime, timedelta
from typing import Optional

from . import settings


def date_only(value: date | datetime) -> date:
    """Returns the calendar date of a date or datetime, dropping any time of day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def today_range(reference: Optional[date] = None) -> tuple[date, date]:
    day = date_only(reference or date.today())
    return day, day


def last_7_days_range(reference: Optional[date] = None) -> tuple[date, date]:
    """Today and the six days before it."""
    day = date_only(reference or date.today())
    return day - timedelta(days=6), day


def this_month_range(reference: Optional[date] = None) -> tuple[date, date]:
    """From the first of the current month through today."""
    day = date_only(reference or date.today())
    return day.replace(day=1), day


RANGE_PRESETS = {
    "today": today_range,
    "week": last_7_days_range,
    "month": this_month_range,
}


def format_date(value: date | datetime) -> str:
    return date_only(value).strftime("%Y-%m-%d")


def format_range(start: date | datetime, end: date | datetime) -> str:
    if date_only(start) == date_only(end):
        return format_date(start)
    return f"{format_date(start)} → {format_date(end)}"


def format_money(amount: float) -> str:
    return f"{settings.CURRENCY_LABEL} {amount:,.0f}"
