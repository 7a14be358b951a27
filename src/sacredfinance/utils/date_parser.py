"""Date and time parsing utilities."""

from datetime import date, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts "today", "yesterday", "tomorrow" and anything dateutil can read
    ("2026-10-18", "October 18, 2026", ...). Any time of day is dropped.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative:
        return relative[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_time(time_str: str) -> time:
    """Parse a time of day such as "10:00" or "6:30 pm".

    Raises:
        ValueError: If time string cannot be parsed
    """
    try:
        return date_parser.parse(time_str.strip()).time().replace(second=0, microsecond=0)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse time '{time_str}': {e}")


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Return inclusive (start, end) dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    month, year or Monday-to-Sunday week.

    Raises:
        ValueError: If period is not one of PERIODS
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    week_start = today - timedelta(days=today.weekday())

    if period == "this-month":
        return month_start, today
    if period == "last-month":
        return month_start - relativedelta(months=1), month_start - timedelta(days=1)
    if period == "this-year":
        return year_start, today
    if period == "last-year":
        return year_start - relativedelta(years=1), year_start - timedelta(days=1)
    if period == "this-week":
        return week_start, today
    if period == "last-week":
        return week_start - timedelta(days=7), week_start - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
