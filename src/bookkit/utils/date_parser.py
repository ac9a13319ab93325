"""Date parsing and month arithmetic utilities."""

from datetime import date, datetime, timedelta, UTC
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# The credit model measures age in 30-day months
DAYS_PER_MONTH = 30


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts "today", "yesterday", "N months ago" and any absolute date
    dateutil understands ("2024-01-15", "January 15, 2024").

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    parts = text.split()
    if len(parts) == 3 and parts[1] in ("month", "months") and parts[2] == "ago":
        try:
            return today - relativedelta(months=int(parts[0]))
        except ValueError:
            raise ValueError(f"Could not parse date '{date_str}'")

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_naive_utc(value: Union[date, datetime]) -> datetime:
    """Normalize a date or datetime to a naive UTC datetime."""
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def elapsed_months(start: Union[date, datetime], end: Union[date, datetime]) -> float:
    """Return the number of 30-day months from start to end."""
    delta = to_naive_utc(end) - to_naive_utc(start)
    return delta.total_seconds() / (DAYS_PER_MONTH * 24 * 3600)


def months_before(value: Union[date, datetime], months: int) -> datetime:
    """Return the naive UTC datetime a number of calendar months earlier."""
    return to_naive_utc(value) - relativedelta(months=months)
